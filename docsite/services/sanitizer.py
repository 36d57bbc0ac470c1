"""Post-resolution clean-up of pages and modules.

Every function here mutates its argument in place and is idempotent:
live reload reruns the whole parse cycle, and a record may be sanitized
again without changing.
"""

import re
from typing import List

from bs4 import BeautifulSoup, Comment

from docsite.models.members import ContentBlock, Function, Property, Sample
from docsite.models.module import Module
from docsite.models.page import LegacyPage

# Tags whose entire subtree is removed from authored descriptions
_REMOVE_TAGS = {
    "script",
    "style",
    "noscript",
    "iframe",
    "object",
    "embed",
    "applet",
}

# Cheap pre-check so plain text never goes through the HTML parser
_UNSAFE_MARKUP_RE = re.compile(
    r"<\s*(?:" + "|".join(sorted(_REMOVE_TAGS)) + r")\b|<!--", re.IGNORECASE
)


def clean_markup(text: str) -> str:
    """Trim *text* and drop scripting/embedding tags and HTML comments from it."""
    text = text.strip()
    if not _UNSAFE_MARKUP_RE.search(text):
        return text

    soup = BeautifulSoup(text, "html.parser")

    for tag in soup.find_all(_REMOVE_TAGS):
        tag.decompose()

    for comment in soup.find_all(string=lambda value: isinstance(value, Comment)):
        comment.extract()

    return str(soup).strip()


def _clean_keywords(keywords: List[str]) -> List[str]:
    cleaned = (k.strip().lower() for k in keywords)
    return list(dict.fromkeys(k for k in cleaned if k))


def _sanitize_samples(samples: List[Sample]) -> List[Sample]:
    for sample in samples:
        sample.code = sample.code.strip("\n").rstrip()
        sample.media = sample.media.strip()
    return [s for s in samples if not s.is_empty]


def _sanitize_blocks(blocks: List[ContentBlock]) -> List[ContentBlock]:
    for block in blocks:
        block.title = block.title.strip()
        block.subtitle = block.subtitle.strip()
        block.text = clean_markup(block.text)
        block.list = [item for item in (clean_markup(i) for i in block.list) if item]
        block.code = block.code.strip("\n").rstrip()
        block.media = block.media.strip()
        block.samples = _sanitize_samples(block.samples)
    return [b for b in blocks if not b.is_empty]


def _sanitize_function(func: Function) -> None:
    func.description = clean_markup(func.description)
    for arg in func.arguments:
        arg.description = clean_markup(arg.description)
    for value in func.returns:
        value.description = clean_markup(value.description)
    func.samples = _sanitize_samples(func.samples)


def _sanitize_property(prop: Property) -> None:
    prop.description = clean_markup(prop.description)
    prop.samples = _sanitize_samples(prop.samples)


def _sanitize_members(functions: List[Function], properties: List[Property]) -> None:
    for func in functions:
        _sanitize_function(func)
    for prop in properties:
        _sanitize_property(prop)

    # Local and inherited members end up interleaved alphabetically
    functions.sort(key=lambda f: f.name.lower())
    properties.sort(key=lambda p: p.name.lower())


def sanitize_page(page: LegacyPage) -> LegacyPage:
    page.title = page.title.strip() or page.type
    page.description = clean_markup(page.description)
    page.keywords = _clean_keywords(page.keywords)
    page.blocks = _sanitize_blocks(page.blocks)

    for constructor in page.constructors:
        _sanitize_function(constructor)
    _sanitize_members(page.functions, page.properties)
    return page


def sanitize_module(module: Module) -> Module:
    module.description = clean_markup(module.description)
    module.keywords = _clean_keywords(module.keywords)
    module.blocks = _sanitize_blocks(module.blocks)
    _sanitize_members(module.functions, module.properties)
    return module
