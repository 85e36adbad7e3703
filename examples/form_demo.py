#!/usr/bin/env python3
"""
Labeled Input Demo

Builds a small form from YAML, drives it with scripted terminal input and
prints each frame.

Usage:
    python examples/form_demo.py
    python examples/form_demo.py --debug     # log widget events to stderr
"""

import sys

from termform import Document, LabeledInput, LabeledInputConfig
from termform.logging import setup_logging

FORM = """
type: select
label: "Size: "
items:
  - small
  - medium
  - content: Extra large
    value: xl
width: 24
y: 1
"""


def show(document: Document, title: str) -> None:
    print(f"--- {title}")
    for line in document.plain_frame:
        print(f"|{line}")


def main() -> None:
    if "--debug" in sys.argv:
        setup_logging("DEBUG")

    document = Document(width=30, height=3)
    name = LabeledInput({"label": "Name: ", "width": 24}, parent=document)
    size = LabeledInput(LabeledInputConfig.from_yaml_string(FORM), parent=document)

    for widget in (name, size):
        widget.on("submit", lambda value, _, w: print(f"submit {w.label.strip()} {value!r}"))

    document.give_focus_to(name)
    for data in (b"A", b"d", b"a"):
        document.feed(data)
    show(document, "typed a name")
    document.feed(b"\r")

    document.give_focus_to(size)
    document.feed(b"\x1b[B")
    document.feed(b"\x1b[B")
    show(document, "picked a size")
    document.feed(b"\r")


if __name__ == "__main__":
    main()
