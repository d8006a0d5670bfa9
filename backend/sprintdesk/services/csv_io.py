"""CSV reading and writing for story import/export.

Files are UTF-8; a leading byte-order mark is dropped on read and written on
export so spreadsheet tools pick the right encoding. Quoted fields may hold
commas, doubled quotes and newlines.
"""
import io

import pandas as pd

from sprintdesk.errors import ImportFileError

BOM = "\ufeff"


def decode(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ImportFileError("CSV file is not valid UTF-8") from e


def read_rows(content: bytes) -> list[list[str]]:
    """All non-blank records, header first, fields trimmed.

    Every record is padded or cut to the header's width.
    """
    text = decode(content)
    if not text.strip():
        raise ImportFileError("CSV is empty")
    width: list[int] = []

    def _fit(fields: list[str]) -> list[str]:
        return fields[: width[0]] if width else fields

    try:
        # The C tokenizer fails on a quote left open at end of file, where the
        # python engine would quietly drop that record and everything after it
        strict = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            on_bad_lines="skip",
        )
        width.append(strict.shape[1])
        df = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=_fit,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise ImportFileError(f"Could not parse CSV: {e}") from e

    df = df.fillna("")
    return [[str(v).strip() for v in record] for record in df.itertuples(index=False, name=None)]


def format_points(points: float | None) -> str:
    if points is None:
        return ""
    if float(points).is_integer():
        return str(int(points))
    return str(points)


def write_rows(header: list[str], rows: list[list[str]]) -> str:
    """BOM-prefixed CSV text; fields quoted only when they need it."""
    df = pd.DataFrame(rows, columns=header, dtype=object)
    return BOM + df.to_csv(index=False, lineterminator="\n")
