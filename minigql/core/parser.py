"""Parser for selection-only query text.

Supports:
- `query { ... }`, `mutation { ... }` and the bare `{ ... }` shorthand
- nested selections, e.g. `{ user { id name } }`
- `#` line comments

Arguments, aliases, fragments, variables and directives are not recognised.
A selection tree is a plain dict mapping each requested field name to its
nested selection; an empty dict marks a leaf. A field requested twice at the
same level keeps the selection of its last occurrence.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from .errors import QuerySyntaxError

logger = logging.getLogger(__name__)

SelectionTree = dict[str, "SelectionTree"]

COMMENT_RE = re.compile(r"\s*#.*$", re.MULTILINE)
OPERATION_RE = re.compile(r"^(query|mutation)\s*{", re.IGNORECASE)
FIELD_NAME_RE = re.compile(r"\s*([A-Za-z0-9_]+)\s*")


@dataclass
class ParsedQuery:
    """Result of parsing query text."""
    operation_type: str  # 'query' or 'mutation'
    selections: SelectionTree = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"operationType": self.operation_type, "selections": self.selections}


class QueryParser:
    """Turns query text into a ParsedQuery."""

    def parse(self, query: str) -> ParsedQuery:
        """Parse query text.

        Raises:
            QuerySyntaxError: If the text is empty, has an unsupported form,
                has unbalanced braces, or contains an unexpected token.
        """
        query = COMMENT_RE.sub("", query).strip()
        if not query:
            raise QuerySyntaxError("Empty query string.")

        operation_type = "query"
        match = OPERATION_RE.match(query)
        if match:
            operation_type = match.group(1).lower()
            # Keep the opening brace of the selection set
            body = query[match.end() - 1:].strip()
        elif query.startswith("{"):
            body = query
        else:
            raise QuerySyntaxError(
                "Unsupported query format. Expected 'query {' or 'mutation {' or '{'."
            )

        if body.count("{") != body.count("}"):
            raise QuerySyntaxError("Mismatched curly braces in query.")

        selections = self._parse_fields(body)
        logger.debug("Parsed %s with %d root fields", operation_type, len(selections))
        return ParsedQuery(operation_type=operation_type, selections=selections)

    def _parse_fields(self, body: str) -> SelectionTree:
        """Parse a selection set body such as `{ id user { name } }`."""
        body = body.strip()
        if body.startswith("{") and body.endswith("}"):
            body = body[1:-1].strip()

        fields: SelectionTree = {}
        offset = 0
        length = len(body)

        while offset < length:
            match = FIELD_NAME_RE.match(body, offset)
            if not match:
                raise QuerySyntaxError(f"Unexpected token near: {body[offset:offset + 20]}...")
            name = match.group(1)
            offset = match.end()

            if offset < length and body[offset] == "{":
                start = offset
                depth = 0
                while offset < length:
                    char = body[offset]
                    offset += 1
                    if char == "{":
                        depth += 1
                    elif char == "}":
                        depth -= 1
                        if depth == 0:
                            break
                if depth != 0:
                    raise QuerySyntaxError(f"Unbalanced braces in field '{name}'.")
                fields[name] = self._parse_fields(body[start:offset])
            else:
                fields[name] = {}

        return fields


def parse_query(query: str) -> ParsedQuery:
    """Parse query text with a default QueryParser."""
    return QueryParser().parse(query)
