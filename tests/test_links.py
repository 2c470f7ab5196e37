import pytest

from jobtables.harmonize.links import (
    aggregator_name,
    classify,
    company_homepage,
    domain_name,
    is_aggregator,
    separate_links,
)
from jobtables.models import LinkKind


@pytest.mark.parametrize("url", [
    "https://simplify.jobs/c/abc123",
    "https://jobright.ai/jobs/engineer",
    "https://linkedin.com/jobs/view/123",
    "https://indeed.com/viewjob?jk=abc",
    "https://glassdoor.com/job-listing",
    "https://jobs.lever.co/company/123",
    "https://boards.greenhouse.io/company",
    "https://company.myworkdayjobs.com/careers",
])
def test_known_aggregators(url):
    assert is_aggregator(url)
    assert classify(url).kind == LinkKind.AGGREGATOR


@pytest.mark.parametrize("url", [
    "https://careers.google.com/jobs/123",
    "https://apple.com/careers/us",
    "https://startup.io/jobs",
    "https://company.com/careers/engineer",
])
def test_company_links(url):
    assert not is_aggregator(url)
    assert classify(url).name is None


@pytest.mark.parametrize("url, name", [
    ("https://simplify.jobs/c/abc", "Simplify"),
    ("https://jobright.ai/jobs/123", "Jobright"),
    ("https://linkedin.com/jobs", "LinkedIn"),
    ("https://jobs.lever.co/x", "Lever"),
    ("https://boards.greenhouse.io/x", "Greenhouse"),
    ("https://angel.co/company/x/jobs", "Wellfound"),
    ("HTTPS://WWW.INDEED.COM/viewjob", "Indeed"),
    ("https://google.com/careers", None),
])
def test_aggregator_names(url, name):
    assert aggregator_name(url) == name


@pytest.mark.parametrize("url", [None, "", "not a url", "http://[::1", "::::", 42])
def test_classify_is_total(url):
    assert classify(url).kind == LinkKind.COMPANY


def test_separate_links():
    company, aggregator, name = separate_links([
        "https://apple.com/careers/123",
        "https://simplify.jobs/c/abc",
        "https://linkedin.com/jobs/view/456",
    ])
    assert company == "https://apple.com/careers/123"
    assert aggregator == "https://simplify.jobs/c/abc"
    assert name == "Simplify"


def test_separate_links_empty():
    assert separate_links([]) == (None, None, None)


@pytest.mark.parametrize("url, name", [
    ("https://apple.com/careers", "Apple"),
    ("https://www.google.com/jobs", "Google"),
    ("https://careers.microsoft.com", "Microsoft"),
    ("stripe.com/jobs", "Stripe"),
    ("not a url", None),
    ("", None),
    (None, None),
])
def test_domain_name(url, name):
    assert domain_name(url) == name


def test_company_homepage():
    assert company_homepage("https://Careers.Acme.com/jobs/1?x=y") == "https://careers.acme.com"
    assert company_homepage("no host here") is None
