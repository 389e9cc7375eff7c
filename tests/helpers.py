import re

from fastapi.testclient import TestClient

from cartform.schemas.add_to_cart import CartLine

_TOKEN_RE = re.compile(r'name="add_to_cart\[_token\]" value="([0-9a-f]+)"')
_STATE_RE = re.compile(r'data-form-state="([A-Z]+)"')


class RecordingCart:
    """Cart fake: remembers every accepted line."""

    def __init__(self):
        self.lines: list[CartLine] = []

    def add(self, quantity: int, color: str) -> CartLine:
        line = CartLine(quantity=quantity, color=color)
        self.lines.append(line)
        return line


def csrf_token_from(html: str) -> str:
    m = _TOKEN_RE.search(html)
    assert m, "no CSRF token in rendered form"
    return m.group(1)


def form_state_from(html: str) -> str:
    m = _STATE_RE.search(html)
    assert m, "no form state marker in rendered page"
    return m.group(1)


def fetch_token(client: TestClient, path: str = "/product") -> str:
    r = client.get(path)
    assert r.status_code == 200
    return csrf_token_from(r.text)


def post_add_to_cart(
    client: TestClient,
    *,
    token: str | None,
    path: str = "/product",
    **values,
):
    """POST the form the way a browser does (bracketed field names)."""
    data = {f"add_to_cart[{k}]": v for k, v in values.items()}
    if token is not None:
        data["add_to_cart[_token]"] = token
    return client.post(path, data=data)
