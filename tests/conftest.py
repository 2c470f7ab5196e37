# tests/conftest.py
from datetime import date

import pytest

from jobtables.config import Settings, get_settings


REFERENCE_DATE = date(2024, 12, 29)


MARKDOWN_README = """\
# Summer 2025 Tech Internships

## 💻 Software Engineering Internship Roles

| Company | Role | Location | Application | Date Posted |
| ------- | ---- | -------- | :---------: | :---------: |
| **[Acme](https://acme.com)** 🔥 | Software Engineer Intern | San Francisco, CA | [Apply](https://acme.com/careers/1) [Simplify](https://simplify.jobs/p/acme-1) | 2d |
| ↳ | Backend Engineer Intern | Seattle, WA | [Apply](https://acme.com/careers/2) | Dec 20 |
| Globex | Data Scientist Intern | London, UK | [Apply](https://jobs.lever.co/globex/3) | 1w |
| Initech | Marketing Intern | Remote | | 0d |

## 🗃️ Inactive Listings

| Company | Role | Location | Application | Date Posted |
| ------- | ---- | -------- | ----------- | ----------- |
| Umbrella | Software Engineer Intern | Berlin, Germany | [Apply](https://umbrella.com/jobs/9) | Oct 01 |
"""


HTML_README = """\
<h2>Software Engineering</h2>
<table>
  <thead>
    <tr><th>Company</th><th>Role</th><th>Location</th><th>Application</th><th>Age</th></tr>
  </thead>
  <tbody>
    <tr>
      <td><strong><a href="https://simplify.jobs/c/Acme">Acme</a></strong> <img src="fire.png" alt="fire"></td>
      <td>SWE Intern</td>
      <td>Toronto, Canada</td>
      <td><a href="https://acme.com/jobs/1"><img src="apply.png" alt="Apply"></a> <a href="https://simplify.jobs/p/1"><img src="simplify.png" alt="Simplify"></a></td>
      <td>3d</td>
    </tr>
    <tr>
      <td>↳</td>
      <td>Frontend Engineer</td>
      <td>New York, NY</td>
      <td><a href="https://acme.com/jobs/2">Apply</a></td>
      <td>1mo</td>
    </tr>
  </tbody>
</table>
"""


@pytest.fixture
def reference_date() -> date:
    return REFERENCE_DATE


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, reference_date=REFERENCE_DATE)


@pytest.fixture
def markdown_readme() -> str:
    return MARKDOWN_README


@pytest.fixture
def html_readme() -> str:
    return HTML_README


@pytest.fixture(autouse=True)
def _clear_settings_cache(monkeypatch):
    for var in ("JOBTABLES_REQUIRE_LINK", "JOBTABLES_DEDUPE", "JOBTABLES_REFERENCE_DATE"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
