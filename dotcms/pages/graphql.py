"""
GraphQL transport: page query documents and their digests.

String arguments are escaped before they are placed in the selector, so a
path or persona containing quotes, backslashes or newlines cannot break out
of its string literal. The selection set is fixed and matches what the
upstream page schema expects.
"""

import hashlib
from string import Template

from dotcms.pages.request import PageRequest

PAGE_QUERY_TEMPLATE = Template(
    """
   {
        ${query} 
        {
            _map
            urlContentMap {
                identifier
                modDate
                publishDate
                creationDate
                title
                baseType
                inode
                archived
                _map
                urlMap
                working
                locked
                contentType
                live
            }
            title
            friendlyName
            description
            tags
            canEdit
            canLock
            canRead
            template {
                inode
                identifier
                drawed
            }
            containers {
                path
                identifier
                maxContentlets
                container {
                    identifier
                    path
                    maxContentlets
                }
                containerStructures {
                    contentTypeVar
                    inode
                    identifier
                }
                containerContentlets {
                    uuid
                    contentlets {
                        identifier
                        modDate
                        publishDate
                        creationDate
                        title
                        baseType
                        inode
                        archived
                        _map
                        urlMap
                        working
                        locked
                        contentType
                        live
                    }
                }
            }
            layout {
                header
                footer
                sidebar {
                    widthPercent
                    width
                    location
                }
                body {
                    rows {
                        columns {
                            leftOffset
                            styleClass
                            width
                            left
                            containers {
                                identifier
                                uuid
                            }
                        }
                    }
                }
            }
            viewAs {
                visitor {
                    persona {
                        name
                        keyTag
                        identifier
                    }
                    device
                    tags {
                        tag
                        count
                    }
                    geo {
                        continent
                        country
                        subdivision
                        city
                        timezone
                        latitude
                        longitude
                        continentCode
                    }
                }
                language {
                    id
                    languageCode
                    countryCode
                    language
                    country
                }
            }
        }
    }
"""
)

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}


def escape_graphql_string(value: str) -> str:
    """Escape a value for use inside a double-quoted GraphQL string."""
    out = []
    for char in value:
        if char in _ESCAPES:
            out.append(_ESCAPES[char])
        elif ord(char) < 0x20:
            out.append(f"\\u{ord(char):04x}")
        else:
            out.append(char)
    return "".join(out)


def _quoted(value: str) -> str:
    return f'"{escape_graphql_string(value)}"'


def build_page_selector(request: PageRequest) -> str:
    """Build the ``page(...)`` selector; argument order is fixed."""
    selector = f"page(url: {_quoted(request.normalized_path)}"
    selector += f",pageMode:{_quoted(request.mode.value)}"
    if request.persona:
        selector += f",personaId : {_quoted(request.persona)}"
    selector += f",fireRules :{'true' if request.fire_rules else 'false'}"
    if request.site_id:
        selector += f",site : {_quoted(request.site_id)}"
    if request.language_id:
        selector += f",languageId : {_quoted(request.language_id)}"
    return selector + ")"


def build_page_query(request: PageRequest) -> str:
    """Build the complete GraphQL page query document."""
    return PAGE_QUERY_TEMPLATE.substitute(query=build_page_selector(request))


def query_id(document: str) -> str:
    """SHA-256 hex digest of a query document; cache key and upstream qid."""
    return hashlib.sha256(document.encode("utf-8")).hexdigest()
