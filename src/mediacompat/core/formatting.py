"""Human-readable formatting helpers for reports and CLI output."""

from __future__ import annotations


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes.

    Returns:
        Formatted string (e.g., "4.2 GB", "128.0 MB", "512 B").
    """
    if size_bytes >= 1024**4:
        return f"{size_bytes / (1024**4):.2f} TB"
    elif size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.2f} GB"
    elif size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.1f} MB"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{max(size_bytes, 0)} B"


def format_duration(seconds: float) -> str:
    """Format a duration for reports.

    Args:
        seconds: Duration in seconds.

    Returns:
        "42.0 seconds" below one minute, "5m 07s" below one hour,
        otherwise "2h 03m 09s".
    """
    if seconds < 60:
        return f"{max(seconds, 0.0):.1f} seconds"
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}h {minutes:02d}m {secs:02d}s"
    return f"{minutes}m {secs:02d}s"


def get_resolution_label(width: int | None, height: int | None) -> str:
    """Get a short resolution label for a video stream.

    Args:
        width: Frame width in pixels.
        height: Frame height in pixels.

    Returns:
        "4K", "1080p", "720p", "480p", "{height}p" or "Unknown".
    """
    if not width or not height:
        return "Unknown"
    if height >= 2160 or width >= 3840:
        return "4K"
    if height >= 1080 or width >= 1920:
        return "1080p"
    if height >= 720 or width >= 1280:
        return "720p"
    if height >= 480:
        return "480p"
    return f"{height}p"
