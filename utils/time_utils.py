# utils/time_utils.py
from datetime import datetime


def format_date(moment: datetime) -> str:
    """1/2/2024 style, no zero padding."""
    return f"{moment.month}/{moment.day}/{moment.year}"


def format_time(moment: datetime) -> str:
    """9:05:12 AM style, no zero padding on the hour."""
    return moment.strftime("%I:%M:%S %p").lstrip("0")


def today(clock=datetime.now) -> str:
    return format_date(clock())
