"""Shared test helpers."""

import redis

PASSWORD = "secret123"


class FakeRedis:
    """In-memory stand-in for the two Redis commands the lock service uses."""

    def __init__(self):
        self.store = {}

    def set(self, name, value, nx=False, ex=None):
        if nx and name in self.store:
            return None
        self.store[name] = value
        return True

    def eval(self, script, numkeys, key, token):
        if self.store.get(key) == token:
            del self.store[key]
            return 1
        return 0


class UnreachableRedis:
    """Every command fails the way a dropped connection does."""

    def __init__(self):
        self.calls = 0

    def set(self, *args, **kwargs):
        self.calls += 1
        raise redis.ConnectionError("Connection refused")

    def eval(self, *args, **kwargs):
        self.calls += 1
        raise redis.ConnectionError("Connection refused")


def login(client, email, password=PASSWORD):
    response = client.post("/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()
