"""
Difftastic JSON output parsing.

With `DFT_DISPLAY=json` difftastic describes each file as:

    {
      "path": "src/lib.rs",
      "language": "Rust",
      "status": "changed",
      "aligned_lines": [[0, 0], [1, 1], [null, 2]],
      "chunks": [[
        {
          "lhs": {"line_number": 1, "changes": [{"start": 0, "end": 5, "content": "hello", "highlight": "string"}]},
          "rhs": {"line_number": 1, "changes": [{"start": 0, "end": 5, "content": "world", "highlight": "string"}]}
        }
      ]]
    }

jj emits a JSON array of these objects; git runs difftastic once per file, so
its output is newline-separated objects.
"""

import json
from typing import Any, Dict, List

from diffview.diffview_exceptions import DifftasticParseError
from diffview.diffview_types import (
    AlignmentPlan, ChangeGroup, DiffFile, DiffLineEntry, DiffLineSide, FileStatus, LineChange
)


class DifftasticParser:
    """Parser for difftastic's JSON output."""

    def parse(self, output: str) -> List[DiffFile]:
        """
        Parse difftastic JSON output into file entries.

        Args:
            output: JSON array (jj) or newline-separated JSON objects (git)

        Returns:
            List of file entries, in output order

        Raises:
            DifftasticParseError: If the output is not valid difftastic JSON
        """
        if not output or not output.strip():
            return []

        try:
            data = json.loads(output)

        except json.JSONDecodeError:
            return self._parse_object_lines(output)

        if isinstance(data, list):
            return [self._parse_file(item) for item in data]

        return [self._parse_file(data)]

    def _parse_object_lines(self, output: str) -> List[DiffFile]:
        files: List[DiffFile] = []

        for line_num, line in enumerate(output.splitlines(), start=1):
            if not line.strip():
                continue

            try:
                data = json.loads(line)

            except json.JSONDecodeError as e:
                raise DifftasticParseError(
                    f"Failed to parse difftastic JSON: {e}",
                    {"line": line_num, "text": line}
                ) from e

            files.append(self._parse_file(data))

        return files

    def _parse_file(self, data: Any) -> DiffFile:
        obj = self._expect_object(data, "file entry")

        try:
            status = FileStatus(obj.get("status"))

        except ValueError as e:
            raise DifftasticParseError(
                f"Failed to parse difftastic JSON: unknown file status {obj.get('status')!r}"
            ) from e

        chunks = obj.get("chunks") or []
        if not isinstance(chunks, list):
            raise DifftasticParseError("Failed to parse difftastic JSON: 'chunks' must be a list")

        return DiffFile(
            path=self._expect_str(obj, "path"),
            language=self._expect_str(obj, "language"),
            status=status,
            aligned_lines=self._parse_aligned_lines(obj.get("aligned_lines") or []),
            chunks=[self._parse_chunk(chunk) for chunk in chunks]
        )

    def _parse_aligned_lines(self, data: Any) -> AlignmentPlan:
        if not isinstance(data, list):
            raise DifftasticParseError("Failed to parse difftastic JSON: 'aligned_lines' must be a list")

        plan: AlignmentPlan = []
        for pair in data:
            if not isinstance(pair, list) or len(pair) != 2:
                raise DifftasticParseError(f"Failed to parse difftastic JSON: invalid aligned line {pair!r}")

            old_ln, new_ln = pair
            plan.append((self._optional_line_number(old_ln), self._optional_line_number(new_ln)))

        return plan

    def _optional_line_number(self, value: Any) -> int | None:
        if value is None:
            return None

        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise DifftasticParseError(f"Failed to parse difftastic JSON: invalid line number {value!r}")

        return value

    def _parse_chunk(self, data: Any) -> ChangeGroup:
        if not isinstance(data, list):
            raise DifftasticParseError("Failed to parse difftastic JSON: chunk must be a list")

        entries: ChangeGroup = []
        for item in data:
            obj = self._expect_object(item, "diff line")
            entries.append(DiffLineEntry(
                lhs=self._parse_side(obj.get("lhs")),
                rhs=self._parse_side(obj.get("rhs"))
            ))

        return entries

    def _parse_side(self, data: Any) -> DiffLineSide | None:
        if data is None:
            return None

        obj = self._expect_object(data, "diff line side")
        line_number = self._optional_line_number(obj.get("line_number"))
        if line_number is None:
            raise DifftasticParseError("Failed to parse difftastic JSON: missing 'line_number'")

        changes = obj.get("changes") or []
        if not isinstance(changes, list):
            raise DifftasticParseError("Failed to parse difftastic JSON: 'changes' must be a list")

        return DiffLineSide(line_number, [self._parse_change(change) for change in changes])

    def _parse_change(self, data: Any) -> LineChange:
        obj = self._expect_object(data, "change")
        start = obj.get("start")
        end = obj.get("end")
        if not self._is_offset(start) or not self._is_offset(end):
            raise DifftasticParseError(f"Failed to parse difftastic JSON: invalid change range {obj!r}")

        return LineChange(
            start=start,
            end=end,
            content=self._optional_str(obj, "content"),
            tag=self._optional_str(obj, "highlight")
        )

    def _is_offset(self, value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)

    def _optional_str(self, obj: Dict[str, Any], key: str) -> str:
        value = obj.get(key)
        if value is None:
            return ""

        if not isinstance(value, str):
            raise DifftasticParseError(f"Failed to parse difftastic JSON: invalid '{key}' {value!r}")

        return value

    def _expect_object(self, data: Any, what: str) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise DifftasticParseError(f"Failed to parse difftastic JSON: {what} must be an object")

        return data

    def _expect_str(self, obj: Dict[str, Any], key: str) -> str:
        value = obj.get(key)
        if not isinstance(value, str):
            raise DifftasticParseError(f"Failed to parse difftastic JSON: missing or invalid '{key}'")

        return value


def split_lines(content: str | None) -> List[str]:
    """
    Split file content into lines.

    Lines break on "\\n" only, with a trailing "\\r" dropped, so line numbers
    agree with difftastic's.  Missing content gives no lines.

    Args:
        content: File content, or None if it could not be fetched

    Returns:
        List of lines without terminators
    """
    if not content:
        return []

    lines = content.split('\n')
    if lines[-1] == '':
        lines.pop()

    return [line[:-1] if line.endswith('\r') else line for line in lines]
