"""Emit one message at every level, then panic."""

import ceethane
from ceethane import Level


def main() -> None:
    ll = ceethane.default(Level.INFO).kvs(user_id=1337)

    ll.debug("hello")
    ll.info("hello")
    ll.warn("hello")
    ll.error("hello")
    ll.fatal("hello")
    ll.panic("hello")


if __name__ == "__main__":
    main()
