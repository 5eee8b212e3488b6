# Kézi próba egy futó szerver ellen: python tests/smoke.py [base_url]
# plain http-hez a szervert SESSION_COOKIE_SECURE=false mellett kell indítani
import sys
import requests

base = sys.argv[1] if len(sys.argv) > 1 else "http://127.0.0.1:1042"
s = requests.Session()

r = s.post(f"{base}/login", json={"username": "tester", "password": "Squ!r3"}, timeout=10)
print("login", r.status_code, repr(r.text))

for _ in range(3):
    r = s.post(f"{base}/next", timeout=10)
    print("next", r.status_code, r.text)

r = s.post(f"{base}/users", json={"id": "u1", "name": "Ann", "age": 30}, timeout=10)
print("upsert", r.status_code)
r = s.get(f"{base}/user/u1", timeout=10)
print("user", r.status_code, r.text)
r = s.get(f"{base}/users", timeout=10)
print("users", r.status_code, r.text)
