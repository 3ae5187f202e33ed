"""Example demonstrating key rotation with ordered fallback verification."""

import logging

from jwtkeyring import SignatureMismatchError, TokenCodec, TokenConfig


OLD_SECRET = "old-secret-key-with-at-least-32-bytes!!"
NEW_SECRET = "new-secret-key-with-at-least-32-bytes!!"
RETIRED_SECRET = "retired-secret-key-with-at-least-32-bytes"


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger("jwt")

    # Before rotation: a single key at index 0
    before = TokenCodec(config=TokenConfig(secret_key=OLD_SECRET, lifetime=3600), logger=logger)
    old_token = before.encode({"sub": "user@example.com"}).token

    # After rotation: the new key is added at the highest index
    after = TokenCodec(
        config=TokenConfig(
            secret_key=[OLD_SECRET, NEW_SECRET],
            algorithm=["HS256", "HS256"],
            lifetime=3600,
        ),
        logger=logger,
    )
    new_token = after.encode({"sub": "user@example.com"}, key_index=1).token

    print("old token verified by key", after.decode(old_token).key_index)
    print("new token verified by key", after.decode(new_token).key_index)

    # Once the old key is dropped, old tokens stop verifying
    retired = TokenCodec(
        config=TokenConfig(
            secret_key={1: NEW_SECRET, 2: RETIRED_SECRET},
            algorithm={1: "HS256", 2: "HS256"},
            lifetime=3600,
        ),
        logger=logger,
    )
    try:
        retired.decode(old_token)
    except SignatureMismatchError as exc:
        print("old token rejected:", exc.reason)


if __name__ == "__main__":
    main()
