from chunkfile.core.errors import InvalidParameterError

B = 1
KB = 1024
MB = 1024 * 1024
GB = 1024 * 1024 * 1024

UNITS = {"B": B, "KB": KB, "MB": MB, "GB": GB}


def parse_unit(unit):
    """Returns the byte multiplier for a unit name (case-insensitive)."""
    try:
        return UNITS[unit.upper()]
    except (KeyError, AttributeError):
        raise InvalidParameterError(
            f"unsupported unit: {unit}, supported units are: {', '.join(UNITS)}"
        ) from None


def format_size(size):
    if size < KB:
        return f"{size} B"
    if size < MB:
        return f"{size / KB:.2f} KB"
    if size < GB:
        return f"{size / MB:.2f} MB"
    return f"{size / GB:.2f} GB"
