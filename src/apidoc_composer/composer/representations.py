"""Text renderings of a request descriptor: an httpx call and a curl command.

Both read the encodings stored on the descriptor, so the two texts always
agree with each other and with what was sent.
"""

import json

from apidoc_composer.composer.assembler import RequestDescriptor

CONTINUATION = " \\\n"


def render_call(descriptor: RequestDescriptor) -> str:
    """Render the request as a Python ``httpx.request`` call."""
    config: dict[str, object] = {
        "method": descriptor.method,
        "url": descriptor.url,
        "headers": descriptor.headers,
    }
    # a str ``params`` is sent verbatim, keeping the bracket-style encoding
    if descriptor.query:
        config["params"] = descriptor.query_string
    if descriptor.body:
        config["content"] = descriptor.body_string

    literal = json.dumps(config, indent=2, ensure_ascii=False)
    return f"import httpx\n\nres = httpx.request(**{literal})\n"


def render_curl(descriptor: RequestDescriptor) -> str:
    """Render the request as a multi-line curl command."""
    text = f'curl -X {descriptor.method} "{descriptor.full_url}"' + CONTINUATION

    for name, value in descriptor.headers.items():
        text += f'  -H "{name}: {value}"' + CONTINUATION

    for name, value in descriptor.body.items():
        text += f'  -d "{name}={value}"' + CONTINUATION

    return text
