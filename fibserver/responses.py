from typing import Any, Optional, Tuple

from flask import Response, request
from werkzeug.exceptions import BadRequest

TEXT = "text/plain"
JSON = "application/json"


def plain(body: str = "", status: int = 200) -> Response:
    return Response(body, status=status, mimetype=TEXT)


def json_text(body: str, status: int = 200) -> Response:
    # a body már kész (pretty) JSON, jsonify rendezné a kulcsokat
    return Response(body, status=status, mimetype=JSON)


# Kérés JSON body-ja: (adat, None) vagy (None, 400-as válasz).
# A JSON null érvényes adat, az alakját a hívó ellenőrzi (422).
def read_json() -> Tuple[Any, Optional[Response]]:
    if not request.is_json:
        return None, plain("invalid JSON body", 400)
    try:
        return request.get_json(), None
    except BadRequest:
        return None, plain("invalid JSON body", 400)
