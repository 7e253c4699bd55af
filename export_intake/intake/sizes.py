_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_size(num_bytes: int | float) -> str:
    """Render a byte count in binary units, e.g. ``format_size(1536) == '1.5 KB'``."""
    value = float(num_bytes)
    for unit in _UNITS[:-1]:
        if abs(value) < 1024:
            return f"{int(value)} B" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} {_UNITS[-1]}"
