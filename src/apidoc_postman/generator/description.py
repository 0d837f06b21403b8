"""Markdown documentation bodies for collection requests.

Postman renders a request description as Markdown with inline HTML, so the
parameter and response tables are emitted as HTML tables. Cell text from the
doc extractor is inserted as-is; apidoc has already rendered it to HTML.
"""

import json
from typing import Any

from apidoc_postman.parser.base import EndpointDescriptor, ParameterField, SuccessBlock

DISCARD_KEYS = frozenset({"group"})


def render_description(endpoint: EndpointDescriptor, normalized_url: str) -> str:
    """Build the description of one request.

    Sections appear in a fixed order: heading, URL, method, parameters,
    response. Parameter and response sections are left out entirely when the
    endpoint has nothing to show for them.
    """
    return (
        f"# {endpoint.description}\n\n\n\n"
        f"**URL**: `{normalized_url}`\n\n"
        f"**Method**: `{endpoint.method.upper()}`\n\n"
        f"{_render_params(endpoint.parameters)}"
        f"{_render_response(endpoint.success)}"
    )


def _render_params(params: list[ParameterField] | None) -> str:
    if not params:
        return ""
    return "<br/>**Params:**\n" + f"{render_table(params)}\n\n"


def _render_response(success: SuccessBlock | None) -> str:
    if success is None or not (success.fields or success.examples):
        return ""

    data = "<br/>**Response:**\n"

    if success.fields:
        sections = [
            f" ***{name}***\n\n{render_table(fields)}\n\n"
            for name, fields in success.fields.items()
        ]
        data += "\n\n".join(sections) + "\n\n"

    if success.examples:
        # Only the first example is shown.
        data += (
            "<br/>**Success response example:**\n\n"
            "```json\n"
            f"{success.examples[0].content}\n"
            "```"
        )

    return data


def render_table(fields: list[ParameterField]) -> str:
    """Render fields as an HTML table.

    Columns are the keys the first record was supplied with, in input order,
    once the discard keys are dropped; every row is read against those
    columns, in list order. A record left with no keys, or an empty list,
    still yields a (degenerate) table.
    """
    rows = [field.table_row(DISCARD_KEYS) for field in fields]
    columns = list(rows[0]) if rows else []

    head = "".join(f"<th>{col}</th>" for col in columns)
    body = "".join(
        "<tr>" + "".join(f"<td>{_cell(row.get(col))}</td>" for col in columns) + "</tr>"
        for row in rows
    )
    return f"<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)
