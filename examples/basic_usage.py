import logging

from jwtkeyring import TokenCodec, load_token_config_from_dict


def main() -> None:
    config = load_token_config_from_dict(
        {
            "SECRET_KEY": "my-super-secret-key-with-at-least-32-bytes",
            "JWTKEYRING_ALGORITHM": "HS256",
            "JWTKEYRING_LIFETIME": 600,
        }
    )

    logger = logging.getLogger("jwt")
    codec = TokenCodec(config=config, logger=logger)

    issued = codec.encode({"sub": "user@example.com", "flow": "signup"})

    print("token:", issued.to_json())
    print("payload:", dict(codec.decode(issued.token).payload))


if __name__ == "__main__":
    main()
