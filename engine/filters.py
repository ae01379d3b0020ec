# 📦 engine/filters.py
# ─────────────────────────────
# Per-field member predicates. An unset criterion always passes.

from schemas.schemas import DawatStatus, Gender, YesNo
from utils.normalize import is_set, norm, to_int, to_number


def matches_gender(member, selected_gender):
    """Gender with male/m and female/f synonyms."""
    if not is_set(selected_gender):
        return True
    selected = Gender.parse(selected_gender)
    return selected is not None and member.gender == selected


def matches_search(member, term):
    """Substring match on name, father name, phone or occupation."""
    if not is_set(term):
        return True
    q = norm(term)
    fields = (member.name, member.father_name, member.phone, member.occupation)
    return any(q in norm(v) for v in fields if v)


def matches_occupation(member, selected_occupation):
    """'Child' selects by age, anything else by occupation text."""
    if not is_set(selected_occupation):
        return True
    if norm(selected_occupation) == "child":
        return member.is_child
    return norm(member.occupation) == norm(selected_occupation)


def matches_education(member, selected_education):
    if not is_set(selected_education):
        return True
    return norm(member.education) == norm(selected_education)


def matches_quran(member, selected_quran):
    if not is_set(selected_quran):
        return True
    return norm(member.quran) == norm(selected_quran)


def matches_maktab(member, selected_maktab):
    """Maktab only applies to children; adults never match."""
    if not is_set(selected_maktab):
        return True
    if not member.is_child:
        return False
    return member.maktab == YesNo.parse(selected_maktab)


def matches_dawat(member, selected_dawat):
    """Current status or any recorded trip of that duration.

    'Nil' means no trips recorded at all, whatever the status says.
    """
    if not is_set(selected_dawat):
        return True
    selected = DawatStatus.parse(selected_dawat)
    if selected is None:
        return False
    if selected == DawatStatus.NIL:
        return member.dawat_counts.total() == 0
    return member.dawat == selected or member.dawat_counts.get(selected) > 0


def matches_dawat_count(member, dawat_count_key, dawat_count_times):
    """Exact trip count for a duration, or at least one when no count given."""
    if not is_set(dawat_count_key):
        return True
    count = member.dawat_counts.get(DawatStatus.parse(dawat_count_key))
    if is_set(dawat_count_times):
        times = to_int(dawat_count_times)
        return times is not None and count == times
    return count > 0


def matches_age(member, min_age, max_age):
    """Inclusive age range. Unknown ages fail once any bound is set."""
    has_min, has_max = is_set(min_age), is_set(max_age)
    if not has_min and not has_max:
        return True
    if member.age is None:
        return False
    if has_min:
        lo = to_number(min_age)
        if lo is None or member.age < lo:
            return False
    if has_max:
        hi = to_number(max_age)
        if hi is None or member.age > hi:
            return False
    return True


def matches_baligh(member, selected_baligh):
    """yes = male aged 14+, no = everyone else (all females included)."""
    if not is_set(selected_baligh):
        return True
    selected = norm(selected_baligh)
    if selected == "yes":
        return member.is_baligh
    if selected == "no":
        return not member.is_baligh
    return True


def matches_street(house, selected_street):
    if not is_set(selected_street):
        return True
    return norm(house.street) == norm(selected_street)


def matches_all(member, filters, house=None):
    """Applies every member predicate; street only when the house is known."""
    return (
        matches_gender(member, filters.gender)
        and matches_search(member, filters.q)
        and matches_occupation(member, filters.occupation)
        and matches_education(member, filters.education)
        and matches_quran(member, filters.quran)
        and matches_maktab(member, filters.maktab)
        and matches_dawat(member, filters.dawat)
        and matches_dawat_count(member, filters.dawat_count_key, filters.dawat_count_times)
        and matches_age(member, filters.min_age, filters.max_age)
        and matches_baligh(member, filters.baligh)
        and (matches_street(house, filters.street) if house is not None else True)
    )
