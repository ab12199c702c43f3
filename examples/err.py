"""Attach an error to a log line."""

import ceethane
from ceethane import Level


def main() -> None:
    ll = ceethane.default(Level.INFO).kvs(user_id=1337)

    err = OSError("oh no!")
    ll.with_error(err).error("something went wrong doing IO")


if __name__ == "__main__":
    main()
