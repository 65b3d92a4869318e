import base64

from gitlab_mcp.core import formatters as fmt
from gitlab_mcp.core.models import File, Project, Variable
from gitlab_mcp.core.pagination import PaginatedResult, empty_paginated_result


def _projects_page():
    return PaginatedResult(
        items=[
            Project(id=1, name="alpha", path_with_namespace="team/alpha", visibility="private"),
            Project(id=2, name="be|ta", path_with_namespace="team/beta", star_count=3),
        ],
        total=42,
        page=1,
        total_pages=3,
        next_page=2,
    )


def test_projects_table_and_pagination_line():
    text = fmt.format_projects(_projects_page())
    assert text.startswith("# Projects")
    assert "**Total:** 42 | **Page:** 1/3" in text
    assert "**Next Page:** 2" in text
    assert "| 1 | alpha | team/alpha | private | 0 |" in text
    # pipes inside cells are escaped
    assert "be\\|ta" in text


def test_empty_list_message():
    text = fmt.format_projects(empty_paginated_result())
    assert "_No projects found._" in text
    assert "**Showing:** 0" in text


def test_truncate_appends_notice():
    text = "x" * 120
    clipped = fmt.truncate(text, 100)
    assert clipped.startswith("x" * 100)
    assert "truncated: showing 100 of 120 characters" in clipped
    assert fmt.truncate("short", 100) == "short"
    assert fmt.truncate(text, 0) == text


def test_file_content_base64_decoded():
    encoded = base64.b64encode(b"hello\nworld").decode()
    text = fmt.format_file(
        File(file_name="a.txt", file_path="dir/a.txt", encoding="base64", content=encoded)
    )
    assert "# File: a.txt" in text
    assert "hello\nworld" in text


def test_file_write_response_short_form():
    text = fmt.format_file(File(file_path="a.txt", branch="main"))
    assert text == "**File:** a.txt\n**Branch:** main"


def test_raw_file_and_job_log_fenced():
    assert fmt.format_raw_file("a.py", "pass") == "# File: a.py\n\n```\npass\n```"
    assert "```\nok\n```" in fmt.format_job_log(5, "ok")
    assert "_Log is empty._" in fmt.format_job_log(5, "")


def test_masked_variable_value_hidden():
    text = fmt.format_variable(Variable(key="TOKEN", value="s3cret", masked=True))
    assert "s3cret" not in text
    assert "***MASKED***" in text


def test_access_level_names():
    assert fmt.access_level_name(30) == "Developer (30)"
    assert fmt.access_level_name(99) == "Custom (99)"
    assert fmt.access_level_name(None) == "-"
