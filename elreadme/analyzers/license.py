"""Fingerprint license notices found in a file's leading comments."""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence, Tuple

from ..logging import get_logger
from ..models import Badge, LicenseCandidate, LicenseMatch
from ..transform.lines import strip_comment_prefix

WILDCARD = "*"

_WHITESPACE = re.compile(r"\s+")

logger = get_logger("license")

_GPL_NOTICE = (
    "* is free software* you can redistribute it and/or modify it under the terms of "
    "the gnu general public license as published by the free software foundation* "
    "either version {version}* any later version. "
    "* is distributed in the hope that it will be useful, but without any warranty; "
    "without even the implied warranty of merchantability or fitness for a particular purpose."
)

_MIT = (
    "permission is hereby granted, free of charge, to any person obtaining a copy of this "
    'software and associated documentation files (the "software"), to deal in the software '
    "without restriction, including without limitation the rights to use, copy, modify, "
    "merge, publish, distribute, sublicense, and/or sell copies of the software, and to "
    "permit persons to whom the software is furnished to do so, subject to the following "
    "conditions: the above copyright notice and this permission notice shall be included "
    "in all copies or substantial portions of the software. "
    'the software is provided "as is", without warranty of any kind, express or implied'
)

_BSD_3 = (
    "redistribution and use in source and binary forms, with or without modification, are "
    "permitted provided that the following conditions are met: "
    "* redistributions of source code must retain the above copyright notice, this list of "
    "conditions and the following disclaimer. "
    "* redistributions in binary form must reproduce the above copyright notice, this list "
    "of conditions and the following disclaimer in the documentation and/or other materials "
    "provided with the distribution. "
    "* neither the name of * nor the names of its contributors may be used to endorse or "
    "promote products derived from this software without specific prior written permission."
)

_APACHE_2 = (
    'licensed under the apache license, version 2.0 (the "license"); you may not use this '
    "file except in compliance with the license. you may obtain a copy of the license at "
    "* unless required by applicable law or agreed to in writing, software distributed "
    'under the license is distributed on an "as is" basis, without warranties or conditions '
    "of any kind, either express or implied."
)


def _shield(label: str) -> str:
    return f"https://img.shields.io/badge/license-{label}-green.svg"


LICENSE_CATALOG: Tuple[LicenseCandidate, ...] = (
    LicenseCandidate(
        name="MIT",
        pattern=_MIT,
        badge=Badge(alt="License MIT", image=_shield("MIT"), link="http://opensource.org/licenses/MIT"),
    ),
    LicenseCandidate(
        name="GPL-2.0",
        pattern=_GPL_NOTICE.format(version="2"),
        badge=Badge(
            alt="License GPLv2",
            image=_shield("GPL_v2"),
            link="http://www.gnu.org/licenses/gpl-2.0.html",
        ),
    ),
    LicenseCandidate(
        name="GPL-3.0",
        pattern=_GPL_NOTICE.format(version="3"),
        badge=Badge(
            alt="License GPLv3",
            image=_shield("GPL_v3"),
            link="http://www.gnu.org/licenses/gpl-3.0.html",
        ),
    ),
    LicenseCandidate(
        name="BSD-3-Clause",
        pattern=_BSD_3,
        badge=Badge(
            alt="License BSD",
            image=_shield("BSD"),
            link="http://opensource.org/licenses/BSD-3-Clause",
        ),
    ),
    LicenseCandidate(
        name="Apache-2.0",
        pattern=_APACHE_2,
        badge=Badge(
            alt="License Apache",
            image=_shield("Apache_v2"),
            link="http://www.apache.org/licenses/LICENSE-2.0",
        ),
    ),
)


def normalize_text(text: str) -> str:
    """Lowercase ``text`` and collapse every whitespace run to one space."""
    return _WHITESPACE.sub(" ", text).strip().lower()


def normalize_comments(lines: Iterable[str]) -> str:
    return normalize_text(" ".join(strip_comment_prefix(line) for line in lines))


def compile_pattern(text: str) -> re.Pattern[str]:
    """Compile license text into a regex where ``*`` matches any run of text."""
    pieces = normalize_text(text).split(WILDCARD)
    return re.compile(".*?".join(re.escape(piece.strip()) for piece in pieces), re.DOTALL)


def match_license(
    comment_lines: Sequence[str],
    catalog: Sequence[LicenseCandidate] = LICENSE_CATALOG,
) -> LicenseMatch:
    """Test the comment block against every catalog entry and collect all hits."""
    haystack = normalize_comments(comment_lines)
    found: List[LicenseCandidate] = [
        candidate for candidate in catalog if compile_pattern(candidate.pattern).search(haystack)
    ]
    result = LicenseMatch(candidates=tuple(found))
    if result.status == "none":
        logger.warning("No known license found in the file header; omitting license badge")
    elif result.status == "ambiguous":
        names = ", ".join(candidate.name for candidate in found)
        logger.warning("Multiple licenses matched (%s); omitting license badge", names)
    else:
        logger.debug("Detected license %s", found[0].name)
    return result


__all__ = [
    "LICENSE_CATALOG",
    "compile_pattern",
    "match_license",
    "normalize_comments",
    "normalize_text",
]
