"""Newsletter email rendering — markup to HTML inside a Jinja2 template."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

import markdown
from jinja2 import Environment, FileSystemLoader
from markdown.extensions import Extension
from markdown.inlinepatterns import SimpleTagInlineProcessor

if TYPE_CHECKING:
    from collections.abc import Sequence

NEWSLETTER_TEMPLATES = Path(__file__).resolve().parent.parent / "templates"

_STRIKE = r"(~~)(.+?)~~"
_MARKDOWN_EXTENSIONS = ["sane_lists", "nl2br"]


@dataclass(frozen=True)
class NewsletterStory:
    """A story whose markup has already been through the resolution passes."""

    headline: str
    long_article: str


class NewsletterMarkupExtension(Extension):
    """Markdown settings for newsletter bodies.

    Raw HTML in the markup is treated as text and escaped on output, and
    ``~~text~~`` becomes ``<del>``. Code spans are matched first, so their
    contents are never rewritten.
    """

    def extendMarkdown(self, md: markdown.Markdown) -> None:  # noqa: N802
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        md.inlinePatterns.register(SimpleTagInlineProcessor(_STRIKE, "del"), "strike", 50)


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(NEWSLETTER_TEMPLATES)),
        autoescape=True,
    )


def markup_to_html(markup: str) -> str:
    """Convert resolved markup into an HTML fragment."""
    if not markup.strip():
        return ""
    return markdown.markdown(
        markup, extensions=[*_MARKDOWN_EXTENSIONS, NewsletterMarkupExtension()]
    )


def render_newsletter(
    subject: str,
    intro: str,
    conclusion: str,
    stories: Sequence[NewsletterStory],
) -> str:
    """Render the full newsletter email body."""
    template = _environment().get_template("newsletter.html")
    return template.render(
        subject=subject,
        intro_html=markup_to_html(intro),
        conclusion_html=markup_to_html(conclusion),
        stories=[
            {"headline": story.headline, "body_html": markup_to_html(story.long_article)}
            for story in stories
        ],
    )
