"""
A pretend web app that threads a logger through its components.

Each component derives its own child logger; the parent's context is never
modified.
"""

from __future__ import annotations

import ceethane
from ceethane import Level, Logger


class Database:
    def __init__(self) -> None:
        self.user_scores: dict[int, int] = {}

    def put_user_score(self, ll: Logger, user_id: int, score: int) -> None:
        ll.kvs(component="database", user_id=user_id).info("insert user")
        self.user_scores[user_id] = score


class WebServer:
    def __init__(self, ll: Logger) -> None:
        self.ll = ll.kvs(component="webserver")
        self.db = Database()

    def put_score(self, user_id: int, score: int) -> None:
        ll = self.ll.kvs(user_id=user_id, action="put_score")
        ll.info("started")

        try:
            self.db.put_user_score(ll, user_id, score)
        except OSError as e:
            ll.with_error(e).error("couldn't persist user score to DB")
            ll.info("failed")
            raise

        ll.info("succeeded")


def main() -> None:
    ll = ceethane.default(Level.INFO).kvs(environment="development")
    ll.info("program booted")
    WebServer(ll).put_score(32, 32)


if __name__ == "__main__":
    main()
