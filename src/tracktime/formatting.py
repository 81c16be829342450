"""Human-readable rendering of durations."""


def format_duration(seconds: int) -> str:
    """Format seconds into a human-readable duration string.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string like "1 hours, 2 minutes, and 3 seconds",
        "2 minutes and 3 seconds" or "3 seconds"
    """
    if seconds < 0:
        return f"-{format_duration(-seconds)}"

    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    if hours > 0:
        return f"{hours} hours, {minutes} minutes, and {secs} seconds"
    if minutes > 0:
        return f"{minutes} minutes and {secs} seconds"
    return f"{secs} seconds"
