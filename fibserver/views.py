from flask import Blueprint
from .responses import plain

views_bp = Blueprint("views", __name__)

HELLO_WORLD = "Hello World!"


# Klasszikus üdvözlés, bejelentkezés nélkül
@views_bp.get("/hello")
def hello_world():
    return plain(HELLO_WORLD)
