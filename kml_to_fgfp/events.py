"""Document events consumed by the placemark scanner.

The reader below turns a KML file into a flat sequence of events:

    ElementOpen("Placemark")
    ElementOpen("name")
    Text("EZE11")
    ElementClose("name")
    ...
    ElementClose("Placemark")

Element names keep lxml's Clark notation (`{uri}local`); callers normalize
them with `simplify_name`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Union

from lxml import etree


@dataclass(frozen=True)
class ElementOpen:
    name: str
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ElementClose:
    name: str


@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class ReadError:
    description: str


Event = Union[ElementOpen, ElementClose, Text, ReadError]


def simplify_name(name: str) -> str:
    """`{http://www.opengis.net/kml/2.2}coordinates` -> `coordinates`."""
    if "}" not in name:
        return name
    return name.split("}", 1)[1]


def read_kml_events(source, huge_tree: bool = False) -> Iterator[Event]:
    """Stream events from a KML path or binary file object.

    Finished elements are cleared and detached from their parent, so memory
    use does not grow with the number of placemarks.
    A syntax error in the document ends the stream with a single ReadError.
    Failing to open `source` raises OSError as usual.
    """
    context = etree.iterparse(
        source,
        events=("start", "end"),
        huge_tree=huge_tree,
        remove_comments=True,
        remove_pis=True,
    )
    try:
        for action, elem in context:
            if action == "start":
                yield ElementOpen(elem.tag, dict(elem.attrib))
                continue
            # Leaf text is reported verbatim, whitespace included; the
            # indentation inside container elements is not
            text = elem.text
            if text and (len(elem) == 0 or text.strip()):
                yield Text(text)
            yield ElementClose(elem.tag)
            elem.clear(keep_tail=True)
            while elem.getprevious() is not None:
                del elem.getparent()[0]
    except etree.XMLSyntaxError as e:
        yield ReadError(str(e))
