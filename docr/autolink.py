from __future__ import annotations

import xml.etree.ElementTree as etree
from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor

RE_BARE_URL = r"(?<![\w/@.])(?P<url>(?:https?://|www\.)[^\s<>\"'`]*[^\s<>\"'`.,:;!?)\]])"


class AutolinkProcessor(InlineProcessor):
    # Never nest a link inside a link written by hand.
    ANCESTOR_EXCLUDES = ("a",)

    def handleMatch(self, m, data):
        url = m.group("url")
        href = url if url.startswith(("http://", "https://")) else f"http://{url}"

        el = etree.Element("a")
        el.set("href", href)
        el.text = url

        return el, m.start(0), m.end(0)


class AutolinkExtension(Extension):
    def extendMarkdown(self, md):
        # Below the built-in link and <url> patterns, above emphasis.
        md.inlinePatterns.register(AutolinkProcessor(RE_BARE_URL, md), "bare_autolink", 105)


def makeExtension(**kwargs):
    return AutolinkExtension(**kwargs)
