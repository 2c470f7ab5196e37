import pytest

from jobtables.models import CanonicalJobPosting, JobCategory, infer_country


@pytest.mark.parametrize("role, category", [
    ("Software Engineer", JobCategory.SOFTWARE_ENGINEERING),
    ("Junior Developer", JobCategory.SOFTWARE_ENGINEERING),
    ("Senior Programmer", JobCategory.SOFTWARE_ENGINEERING),
    ("Staff Engineer", JobCategory.SOFTWARE_ENGINEERING),
    ("Machine Learning Engineer", JobCategory.MACHINE_LEARNING),
    ("ML Engineer", JobCategory.MACHINE_LEARNING),
    ("AI Engineer", JobCategory.MACHINE_LEARNING),
    ("Data Scientist", JobCategory.DATA_SCIENCE),
    ("Data Analyst", JobCategory.DATA_SCIENCE),
    ("Frontend Engineer", JobCategory.FRONTEND),
    ("Front-end Developer", JobCategory.FRONTEND),
    ("UI Engineer", JobCategory.FRONTEND),
    ("Backend Engineer", JobCategory.BACKEND),
    ("Back-end Developer", JobCategory.BACKEND),
    ("Full Stack Developer", JobCategory.FULL_STACK),
    ("Fullstack Engineer", JobCategory.FULL_STACK),
    ("iOS Developer", JobCategory.MOBILE),
    ("Android Engineer", JobCategory.MOBILE),
    ("Mobile Developer", JobCategory.MOBILE),
    ("DevOps Engineer", JobCategory.DEVOPS),
    ("Site Reliability Engineer", JobCategory.DEVOPS),
    ("SRE", JobCategory.DEVOPS),
    ("Platform Engineer", JobCategory.DEVOPS),
    ("Security Engineer", JobCategory.SECURITY),
    ("Cybersecurity Analyst", JobCategory.SECURITY),
    ("Product Manager", JobCategory.PRODUCT_MANAGEMENT),
    ("UX Designer", JobCategory.DESIGN),
    ("UI/UX Designer", JobCategory.DESIGN),
    ("Embedded Systems Engineer", JobCategory.EMBEDDED),
    ("Firmware Engineer", JobCategory.EMBEDDED),
    ("Game Developer", JobCategory.GAMEDEV),
    ("Unity Engineer", JobCategory.GAMEDEV),
])
def test_infer_category(role, category):
    assert JobCategory.infer(role) == category


@pytest.mark.parametrize("role", ["Account Executive", "Marketing Manager", "Sales Representative", "", None])
def test_infer_falls_back_to_other(role):
    assert JobCategory.infer(role) == JobCategory.OTHER


def test_infer_is_case_insensitive():
    assert JobCategory.infer("SOFTWARE ENGINEER") == JobCategory.SOFTWARE_ENGINEERING
    assert JobCategory.infer("machine learning engineer") == JobCategory.MACHINE_LEARNING
    assert JobCategory.infer("iOS DEVELOPER") == JobCategory.MOBILE


@pytest.mark.parametrize("location, country", [
    ("Toronto, Canada", "Canada"),
    ("London, UK", "UK"),
    ("Berlin", "Germany"),
    ("Bangalore, India", "India"),
    ("Austin, TX", "USA"),
    ("New York", "USA"),
    ("Remote in USA", "USA"),
    ("Remote", "USA"),
    ("", "USA"),
    ("Duluth", "USA"),
    ("Indianapolis, IN", "USA"),
    ("Dublin, CA", "USA"),
    ("Albuquerque, New Mexico", "USA"),
    ("Rome, GA", "USA"),
    ("Dublin, Ireland", "Ireland"),
    ("Mexico City, Mexico", "Mexico"),
    ("Rome", "Italy"),
])
def test_infer_country(location, country):
    assert infer_country(location) == country


def test_infer_country_uses_word_boundary_for_short_codes():
    # "uk" inside another word is not the United Kingdom
    assert infer_country("Milwaukee, WI") == "USA"


def test_infer_country_custom_default():
    assert infer_country("Somewhere", default="Remote") == "Remote"


def test_posting_construction_normalizes_fields():
    posting = CanonicalJobPosting(
        employer="  Acme  ",
        role="Software  Engineer Intern",
        location=" Toronto, Canada ",
        company_link="  ",
        aggregator_link="https://simplify.jobs/p/1",
        notes="",
    )
    assert posting.employer == "Acme"
    assert posting.role == "Software Engineer Intern"
    assert posting.company_link is None
    assert posting.notes is None
    assert posting.country == "Canada"
    assert posting.is_internship is True
    assert posting.unique_link == "https://simplify.jobs/p/1"


def test_posting_to_dict_carries_pending_status():
    posting = CanonicalJobPosting(employer="Acme", role="Engineer", company_link="https://acme.com/jobs/1")
    d = posting.to_dict()
    assert d["analysis_status"] == "pending"
    assert d["unique_link"] == "https://acme.com/jobs/1"
    assert set(CanonicalJobPosting.get_export_columns()) <= set(d)
