# 📦 /tests/test_filters.py

import pytest

from engine import filters
from schemas.schemas import FilterCriteria
from tests.utils.dummies import make_house, make_member

# ---------------------- Gender ----------------------

@pytest.mark.parametrize("selected", ["Male", "male", " M ", "m"])
def test_gender_male_synonyms(selected):
    assert filters.matches_gender(make_member(gender="Male"), selected)
    assert filters.matches_gender(make_member(gender="m"), selected)
    assert not filters.matches_gender(make_member(gender="Female"), selected)


@pytest.mark.parametrize("selected", ["Female", "FEMALE", "f"])
def test_gender_female_synonyms(selected):
    assert filters.matches_gender(make_member(gender="f"), selected)
    assert not filters.matches_gender(make_member(gender="Male"), selected)


def test_gender_unset_and_unknown():
    member = make_member(gender="Male")
    assert filters.matches_gender(member, None)
    assert filters.matches_gender(member, "")
    assert not filters.matches_gender(member, "other")


def test_gender_unknown_on_both_sides_never_matches():
    member = make_member(gender="other")
    assert member.gender is None
    assert not filters.matches_gender(member, "other")
    assert not filters.matches_gender(member, "Male")

# ---------------------- Search ----------------------

def test_search_matches_any_text_field():
    member = make_member(name="Abdul Rahman", fatherName="Hamid", phone="0311-555", occupation="Tailor")
    assert filters.matches_search(member, "rahman")
    assert filters.matches_search(member, "HAMID")
    assert filters.matches_search(member, "555")
    assert filters.matches_search(member, " tail ")
    assert not filters.matches_search(member, "karim")


def test_search_empty_term_matches():
    assert filters.matches_search(make_member(), "")
    assert filters.matches_search(make_member(), None)

# ---------------------- Occupation ----------------------

def test_occupation_child_uses_age_only():
    assert filters.matches_occupation(make_member(age=13, occupation="Student"), "Child")
    assert not filters.matches_occupation(make_member(age=14, occupation="Child"), "Child")
    assert not filters.matches_occupation(make_member(age=None), "Child")


def test_occupation_exact_normalized():
    member = make_member(occupation=" Shopkeeper ")
    assert filters.matches_occupation(member, "shopkeeper")
    assert not filters.matches_occupation(member, "shop")

# ---------------------- Education / Quran ----------------------

def test_education_and_quran_equality():
    member = make_member(education="Hafiz", quran="Yes")
    assert filters.matches_education(member, "hafiz")
    assert not filters.matches_education(member, "Alim")
    assert filters.matches_quran(member, "yes")
    assert not filters.matches_quran(member, "no")


def test_quran_unknown_never_matches():
    member = make_member(quran=None)
    assert not filters.matches_quran(member, "no")
    assert not filters.matches_quran(member, "yes")

# ---------------------- Maktab ----------------------

def test_maktab_adults_never_match():
    adult = make_member(age=20, maktab="yes")
    assert not filters.matches_maktab(adult, "yes")
    assert not filters.matches_maktab(adult, "no")


def test_maktab_child_defaults_to_no():
    child = make_member(age=10, maktab="no")
    assert filters.matches_maktab(child, "no")
    assert not filters.matches_maktab(child, "yes")

    unknown = make_member(age=10, maktab=None)
    assert filters.matches_maktab(unknown, "no")


def test_maktab_child_attending():
    assert filters.matches_maktab(make_member(age=8, maktab="yes"), "Yes")

# ---------------------- Dawat ----------------------

def test_dawat_nil_uses_counts_not_status():
    member = make_member(dawat="Nil", dawatCounts={"3-day": 2})
    assert not filters.matches_dawat(member, "Nil")
    assert filters.matches_dawat(member, "3-day")
    assert not filters.matches_dawat(member, "40-day")


def test_dawat_status_alone_matches():
    member = make_member(dawat="40-day", dawatCounts={})
    assert filters.matches_dawat(member, "40-day")
    assert filters.matches_dawat(member, "Nil")  # no recorded trips


def test_dawat_unknown_value_never_matches():
    assert not filters.matches_dawat(make_member(dawat="3-day"), "1-year")

# ---------------------- Dawat count ----------------------

def test_dawat_count_exact_and_any():
    member = make_member(dawatCounts={"10-day": 3})
    assert filters.matches_dawat_count(member, "10-day", "3")
    assert filters.matches_dawat_count(member, "10-day", 3)
    assert not filters.matches_dawat_count(member, "10-day", "2")
    assert filters.matches_dawat_count(member, "10-day", "")
    assert not filters.matches_dawat_count(member, "4-month", None)


def test_dawat_count_zero_is_a_real_value():
    member = make_member(dawatCounts={"3-day": 0})
    assert filters.matches_dawat_count(member, "3-day", "0")
    assert not filters.matches_dawat_count(member, "3-day", None)


def test_dawat_count_missing_key_or_bad_times():
    member = make_member(dawatCounts={"3-day": 1})
    assert filters.matches_dawat_count(member, "", "5")
    assert not filters.matches_dawat_count(member, "3-day", "once")

# ---------------------- Age ----------------------

@pytest.mark.parametrize("age, expected", [(17, False), (18, True), (25, True), (30, True), (31, False)])
def test_age_bounds_inclusive(age, expected):
    assert filters.matches_age(make_member(age=age), "18", "30") is expected


def test_age_single_bound():
    assert filters.matches_age(make_member(age=5), None, "5")
    assert not filters.matches_age(make_member(age=6), "", "5")
    assert filters.matches_age(make_member(age=60), "0", None)


def test_age_unknown_fails_when_bounded():
    member = make_member(age="unknown")
    assert filters.matches_age(member, None, None)
    assert not filters.matches_age(member, "0", None)


def test_age_invalid_bound_not_satisfied():
    assert not filters.matches_age(make_member(age=20), "abc", None)

# ---------------------- Baligh ----------------------

def test_baligh_yes_only_adult_males():
    assert filters.matches_baligh(make_member(gender="Male", age=14), "yes")
    assert not filters.matches_baligh(make_member(gender="Male", age=13), "yes")
    assert not filters.matches_baligh(make_member(gender="Female", age=40), "yes")


def test_baligh_no_includes_every_female():
    # Adult women land in "no": maturity is only derived for males.
    assert filters.matches_baligh(make_member(gender="Female", age=40), "no")
    assert filters.matches_baligh(make_member(gender="Female", age=5), "no")
    assert filters.matches_baligh(make_member(gender="Male", age=13), "no")
    assert not filters.matches_baligh(make_member(gender="Male", age=30), "no")


def test_baligh_unknown_value_passes():
    assert filters.matches_baligh(make_member(), "maybe")

# ---------------------- Street / all ----------------------

def test_street_exact_normalized():
    house = make_house("7", street="Masjid Road")
    assert filters.matches_street(house, " masjid road ")
    assert not filters.matches_street(house, "Masjid")


def test_matches_all_conjunction():
    member = make_member(gender="Female", age=25, occupation="Doctor")
    house = make_house("3", street="Oak")
    assert filters.matches_all(member, FilterCriteria(gender="f", minAge="20", street="oak"), house)
    assert not filters.matches_all(member, FilterCriteria(gender="f", minAge="30"), house)
    assert not filters.matches_all(member, FilterCriteria(street="Elm"), house)
    # Street is skipped without a house
    assert filters.matches_all(member, FilterCriteria(street="Elm"))
