# tedit/utils/fileio.py
"""
tedit.utils.fileio
==================

Raw file access for the editor: reading a document into a list of lines and
writing it back. Encoding is detected with `chardet` on read and the same
encoding is reused on write, so a latin-1 file stays latin-1 after `:E`.
Pure ASCII files are reported as utf-8. Text the encoding cannot represent
is never substituted on write.

All failures are reported as `FileIOError`; nothing here is retried.
"""

import logging
from typing import List, Tuple

import chardet

from tedit.core.Errors import FileIOError

logger = logging.getLogger("tedit")

CHARDET_SAMPLE_SIZE = 1024 * 20
CHARDET_MIN_CONFIDENCE = 0.75


def _candidate_encodings(sample: bytes) -> List[Tuple[str, str]]:
    """Builds the ordered (encoding, errors) pairs to try for `sample`."""
    result = chardet.detect(sample)
    guess = result.get("encoding")
    confidence = result.get("confidence") or 0.0
    logger.debug(f"Chardet detected encoding '{guess}' with confidence {confidence:.2f}")

    ordered: List[Tuple[str, str]] = []
    if guess and confidence >= CHARDET_MIN_CONFIDENCE:
        ordered.append((guess, "strict"))
    ordered += [("utf-8", "strict"), ("latin-1", "strict")]
    if guess:
        ordered.append((guess, "replace"))
    ordered.append(("utf-8", "replace"))

    seen = set()
    unique = []
    for enc, errors in ordered:
        key = (enc.lower(), errors)
        if key not in seen:
            seen.add(key)
            unique.append((enc, errors))
    return unique


def read_lines(path: str) -> Tuple[List[str], str]:
    """Reads `path` and returns its lines (without terminators) and encoding.

    An empty file yields `[""]` so the document always has one line.

    Raises:
        FileIOError: The file is missing, unreadable or undecodable.
    """
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise FileIOError(path, e.strerror or str(e)) from e

    if not raw:
        logger.info(f"File '{path}' is empty.")
        return [""], "utf-8"

    for encoding, errors in _candidate_encodings(raw[:CHARDET_SAMPLE_SIZE]):
        try:
            text = raw.decode(encoding, errors=errors)
        except (UnicodeDecodeError, LookupError):
            logger.debug(f"Decoding '{path}' as {encoding} ({errors}) failed")
            continue
        if encoding.lower() == "ascii":
            # utf-8 is a superset of ascii.
            encoding = "utf-8"
        lines = text.replace("\r\n", "\n").split("\n")
        if len(lines) > 1 and lines[-1] == "":
            lines.pop()
        logger.debug(f"Read {len(lines)} lines from '{path}' as {encoding}")
        return lines, encoding

    raise FileIOError(path, "could not decode file contents")


def write_lines(path: str, lines: List[str], encoding: str = "utf-8") -> None:
    """Writes each line followed by a newline, overwriting `path`.

    The text is encoded before the file is opened, so a character the
    encoding cannot represent leaves the file on disk untouched.

    Raises:
        FileIOError: The text cannot be encoded, or the file cannot be
            created or written.
    """
    try:
        data = "".join(line + "\n" for line in lines).encode(encoding)
    except (UnicodeEncodeError, LookupError) as e:
        raise FileIOError(path, f"cannot encode as {encoding}: {e}") from e
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise FileIOError(path, e.strerror or str(e)) from e
    logger.debug(f"Wrote {len(lines)} lines to '{path}' as {encoding}")
