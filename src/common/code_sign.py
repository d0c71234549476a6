"""Integrity signatures for installed library definitions.

A signed file starts with two comment lines holding an md5 digest and the
definitions version, followed by a blank line and the original content.
"""
from __future__ import annotations

import hashlib
from typing import Callable

from constants import Constants


def _digest(content: str, version: str) -> str:
    return hashlib.md5(f"{version}\n{content}".encode("utf-8")).hexdigest()


def sign_code(content: str, version: str) -> str:
    """Prefix ``content`` with its signature header."""
    return (
        f"{Constants.SIGNATURE_PREFIX}{_digest(content, version)}\n"
        f"{Constants.VERSION_PREFIX}{version}\n\n"
        f"{content}"
    )


def sign_code_preprocessor(version: str) -> Callable[[str], str]:
    """Return a copy_file preprocessor that signs with ``version``."""
    return lambda content: sign_code(content, version)


def verify_signature(signed: str) -> bool:
    """Return True if the header of ``signed`` matches its body."""
    lines = signed.split("\n", 3)
    if len(lines) < 4:
        return False
    sig_line, ver_line, blank, body = lines
    if not (sig_line.startswith(Constants.SIGNATURE_PREFIX)
            and ver_line.startswith(Constants.VERSION_PREFIX)
            and blank == ""):
        return False
    signature = sig_line[len(Constants.SIGNATURE_PREFIX):]
    version = ver_line[len(Constants.VERSION_PREFIX):]
    return signature == _digest(body, version)
