"""
Validation utilities
"""

MAX_HABIT_NAME_LENGTH = 200


def validate_habit_name(value: str | None) -> tuple[bool, str | None]:
    """
    Validate a habit name

    Returns:
        (is_valid, error_message)

    Example:
        >>> validate_habit_name("  Leer 20 minutos ")
        (True, None)
        >>> validate_habit_name("   ")
        (False, "Habit name cannot be empty")
    """
    if value is None or not value.strip():
        return False, "Habit name cannot be empty"

    if len(value.strip()) > MAX_HABIT_NAME_LENGTH:
        return False, f"Habit name must be at most {MAX_HABIT_NAME_LENGTH} characters"

    return True, None


def validate_and_normalize_habit_name(value: str | None) -> str:
    """
    Validate and trim a habit name (raises on failure)

    Raises:
        ValueError: if validation fails
    """
    is_valid, error = validate_habit_name(value)
    if not is_valid:
        raise ValueError(error)

    return value.strip()
