"""JSON file utilities

Rush configuration files (rush.json, deploy scenarios) may contain ``//`` and
``/* */`` comments, which the standard json module rejects.
"""

import json
from pathlib import Path
from typing import Any


def strip_json_comments(text: str) -> str:
    """
    Remove comments from JSON text, leaving string literals untouched

    Args:
        text: JSON text that may contain comments

    Returns:
        JSON text without comments
    """
    result = []
    i = 0
    length = len(text)
    in_string = False

    while i < length:
        char = text[i]

        if in_string:
            result.append(char)
            if char == '\\' and i + 1 < length:
                result.append(text[i + 1])
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
            continue

        if char == '"':
            in_string = True
            result.append(char)
            i += 1
        elif text.startswith('//', i):
            newline = text.find('\n', i)
            i = length if newline == -1 else newline
        elif text.startswith('/*', i):
            end = text.find('*/', i + 2)
            i = length if end == -1 else end + 2
        else:
            result.append(char)
            i += 1

    return ''.join(result)


def load_json_file(file_path: Path, allow_comments: bool = True) -> Any:
    """
    Load a JSON file

    Args:
        file_path: Path to JSON file
        allow_comments: Strip comments before parsing

    Returns:
        Parsed JSON value

    Raises:
        OSError: If the file cannot be read
        ValueError: If the content is not valid JSON
    """
    with open(file_path, 'r', encoding='utf-8-sig') as f:
        text = f.read()

    if allow_comments:
        text = strip_json_comments(text)

    return json.loads(text)
