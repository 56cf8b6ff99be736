# ABOUTME: JSON-with-comments support for editor settings files
# ABOUTME: Strips // and /* */ comments and trailing commas, string-aware


def strip_jsonc(text: str) -> str:
    """Turn JSONC text into plain JSON text.

    ABOUTME: State machine tracks whether we are inside a JSON string,
    ABOUTME: so "https://..." values and "/*" inside strings survive

    Args:
        text: Raw file content, possibly with comments and trailing commas

    Returns:
        Text that json.loads() accepts if the input was otherwise valid

    Examples:
        >>> strip_jsonc('{"a": 1, // note\\n}')
        '{"a": 1 \\n}'
    """
    return _strip_trailing_commas(_strip_comments(text))


def _strip_comments(text: str) -> str:
    result: list[str] = []
    i = 0
    length = len(text)
    in_string = False
    escape = False

    while i < length:
        ch = text[i]

        if in_string:
            result.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            result.append(ch)
            i += 1
            continue

        # // line comment, keep the newline
        if ch == "/" and i + 1 < length and text[i + 1] == "/":
            i += 2
            while i < length and text[i] != "\n":
                i += 1
            continue

        # /* block comment */, unterminated runs to end of input
        if ch == "/" and i + 1 < length and text[i + 1] == "*":
            i += 2
            while i + 1 < length and not (text[i] == "*" and text[i + 1] == "/"):
                i += 1
            i += 2
            continue

        result.append(ch)
        i += 1

    return "".join(result)


def _strip_trailing_commas(text: str) -> str:
    """Drop commas that are directly followed (modulo whitespace) by } or ]."""
    result: list[str] = []
    i = 0
    length = len(text)
    in_string = False
    escape = False

    while i < length:
        ch = text[i]

        if in_string:
            result.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
        elif ch == ",":
            j = i + 1
            while j < length and text[j] in " \t\r\n":
                j += 1
            if j < length and text[j] in "}]":
                i += 1
                continue

        result.append(ch)
        i += 1

    return "".join(result)
