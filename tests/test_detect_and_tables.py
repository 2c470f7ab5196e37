import pytest

from jobtables.extract import detect_format, extract_links, has_fire_marker, parse_tables, strip_links
from jobtables.extract.markdown import clean_markdown_cell, shorten_heading, split_row
from jobtables.models import TableFormat


# ----------------------------- Detection -----------------------------

@pytest.mark.parametrize("text, fmt", [
    ("<TABLE><tr><td>x</td></tr></TABLE>", TableFormat.HTML),
    ("| a | b |\n|---|---|\n| 1 | 2 |", TableFormat.MARKDOWN),
    ("| a | b |\n| :--- | ---: |", TableFormat.MARKDOWN),
    ("|a|b|\n|-|-|", TableFormat.MARKDOWN),
    ("| a | b |\n|---|---|\n<table></table>", TableFormat.MIXED),
    ("just some prose | with a pipe", TableFormat.UNKNOWN),
    ("| a | b |\n| 1 | 2 |", TableFormat.UNKNOWN),
    ("", TableFormat.UNKNOWN),
    (None, TableFormat.UNKNOWN),
])
def test_detect_format(text, fmt):
    assert detect_format(text) == fmt


# ----------------------------- Markers -----------------------------

def test_link_markers():
    cell = "Apply [[LINK:https://a.com/1]] [[LINK:https://simplify.jobs/p/2]]"
    assert extract_links(cell) == ["https://a.com/1", "https://simplify.jobs/p/2"]
    assert strip_links(cell) == "Apply"
    assert extract_links("") == []


@pytest.mark.parametrize("cell, flagged", [
    ("Acme 🔥", True),
    ('<img src="x.png" alt="fire"> Acme', True),
    ("Acme :fire:", True),
    ("Acme", False),
    ("", False),
])
def test_fire_marker(cell, flagged):
    assert has_fire_marker(cell) is flagged


# ----------------------------- Markdown -----------------------------

def test_clean_markdown_cell():
    assert clean_markdown_cell("[Apply](https://a.com/1)") == "Apply [[LINK:https://a.com/1]]"
    assert clean_markdown_cell("**Acme**") == "Acme"
    assert clean_markdown_cell("![Apply](https://img/apply.png)") == "Apply"
    assert clean_markdown_cell('<a href="https://a.com/2"><b>Go</b></a>') == "Go [[LINK:https://a.com/2]]"
    assert clean_markdown_cell("AT&amp;T :fire:") == "AT&T 🔥"
    assert clean_markdown_cell("[x](https://a.com/(1))") == "x [[LINK:https://a.com/(1)]]"
    assert clean_markdown_cell("[a](https://a.com/1) [b](https://b.com/2)") == (
        "a [[LINK:https://a.com/1]] b [[LINK:https://b.com/2]]"
    )


def test_split_row_respects_escaped_pipes():
    assert split_row("| a \\| b | c |") == ["a \\| b", "c"]


@pytest.mark.parametrize("heading, short", [
    ("Software Engineering New Grad Roles", "Software Engineering"),
    ("Data Science Positions 2025", "Data Science"),
    ("Quantitative Finance Trading Research Jobs", "Quantitative Finance Trading"),
    ("Jobs", "Jobs"),
])
def test_shorten_heading(heading, short):
    assert shorten_heading(heading) == short


def test_parse_markdown_tables(markdown_readme):
    tables = parse_tables(markdown_readme)
    assert len(tables) == 2

    active, inactive = tables
    assert active.format == TableFormat.MARKDOWN
    assert active.headers == ["Company", "Role", "Location", "Application", "Date Posted"]
    assert active.row_count == 4
    assert active.category == "💻 Software Engineering"
    assert active.rows[0][0] == "Acme [[LINK:https://acme.com]] 🔥"
    assert active.rows[3][3] == ""

    # Inactive sections keep the previous category
    assert inactive.category == active.category
    assert inactive.row_count == 1


def test_markdown_table_ends_at_blank_line():
    text = "| Company | Role |\n|---|---|\n| A | B |\n\n| C | D |\n"
    tables = parse_tables(text)
    assert len(tables) == 1
    assert tables[0].rows == [["A", "B"]]


def test_markdown_table_without_heading_defaults_to_other():
    tables = parse_tables("| Company | Role |\n|---|---|\n| A | B |")
    assert tables[0].category == "Other"


def test_rows_may_be_ragged():
    tables = parse_tables("| Company | Role | Location |\n|---|---|---|\n| A | B |")
    assert tables[0].rows == [["A", "B"]]
    assert tables[0].column_count == 3


# ----------------------------- HTML -----------------------------

def test_parse_html_tables(html_readme):
    tables = parse_tables(html_readme)
    assert len(tables) == 1

    table = tables[0]
    assert table.format == TableFormat.HTML
    assert table.category == "Software Engineering"
    assert table.headers == ["Company", "Role", "Location", "Application", "Age"]
    assert table.row_count == 2

    employer, role, location, link, age = table.rows[0]
    assert employer.startswith("Acme 🔥")
    assert extract_links(employer) == ["https://simplify.jobs/c/Acme"]
    assert role == "SWE Intern"
    assert extract_links(link) == ["https://acme.com/jobs/1", "https://simplify.jobs/p/1"]
    assert age == "3d"


def test_html_table_without_th_uses_first_row():
    text = "<table><tr><td>Company</td><td>Role</td></tr><tr><td>A</td><td>B</td></tr></table>"
    table = parse_tables(text)[0]
    assert table.headers == ["Company", "Role"]
    assert table.rows == [["A", "B"]]


def test_html_skips_placeholder_rows():
    text = (
        "<table><tr><th>Company</th><th>Role</th></tr>"
        "<tr><td>---</td><td>---</td></tr>"
        "<tr><td></td><td></td></tr>"
        "<tr><td>A</td><td>B</td></tr></table>"
    )
    assert parse_tables(text)[0].rows == [["A", "B"]]


def test_html_category_from_markdown_heading():
    text = "## Product Management\n\n<table><tr><th>Company</th><th>Role</th></tr><tr><td>A</td><td>PM</td></tr></table>"
    assert parse_tables(text)[0].category == "Product Management"


def test_mixed_prefers_html_tables():
    text = (
        "| Company | Role |\n|---|---|\n| MdCo | Engineer |\n\n"
        "<table><tr><th>Company</th><th>Role</th></tr><tr><td>HtmlCo</td><td>Engineer</td></tr></table>"
    )
    assert detect_format(text) == TableFormat.MIXED
    tables = parse_tables(text)
    assert [t.format for t in tables] == [TableFormat.HTML]
    assert tables[0].rows == [["HtmlCo", "Engineer"]]


def test_mixed_falls_back_to_markdown():
    text = "| Company | Role |\n|---|---|\n| MdCo | Engineer |\n\n<table></table>"
    tables = parse_tables(text)
    assert [t.format for t in tables] == [TableFormat.MARKDOWN]


def test_unknown_yields_no_tables():
    assert parse_tables("nothing tabular here") == []
    assert parse_tables("") == []
