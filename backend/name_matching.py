from typing import Iterable, List

from models import ParsedShift


def names_match(shift_name: str, user_name: str) -> bool:
    """
    Does a parsed employee name refer to the given person?

    Tries an exact match, then the "Last, First" form of the user's name,
    then a loose check that every word of the user's name (longer than 2
    characters, at least two of them) appears in the shift name. The loose
    check can produce false positives ("Ann Lee" vs "Joanne Leeds").
    """
    if not shift_name or not user_name:
        return False

    shift_name = shift_name.lower().strip()
    user_name = user_name.lower().strip()

    if shift_name == user_name:
        return True

    user_parts = user_name.split()
    if len(user_parts) >= 2:
        reversed_name = f"{user_parts[-1]}, {' '.join(user_parts[:-1])}"
        if shift_name == reversed_name:
            return True

    name_words = [w for w in user_parts if len(w) > 2]
    return len(name_words) >= 2 and all(w in shift_name for w in name_words)


def filter_shifts_for_employee(shifts: Iterable[ParsedShift], user_name: str) -> List[ParsedShift]:
    return [s for s in shifts if names_match(s.employee_name, user_name)]


def employee_names(shifts: Iterable[ParsedShift]) -> List[str]:
    seen = set()
    names = []
    for s in shifts:
        if s.employee_name and s.employee_name not in seen:
            seen.add(s.employee_name)
            names.append(s.employee_name)
    return names
