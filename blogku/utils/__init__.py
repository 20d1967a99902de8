from blogku.utils.helpers import host, today_str, utc_now

__all__ = ["host", "today_str", "utc_now"]
