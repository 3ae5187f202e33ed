"""Example demonstrating per-key audiences for multi-tenant deployments."""

import logging

from jwtkeyring import TokenCodec, TokenConfig, VerificationError


def main() -> None:
    # Configure logging to see validation messages
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger("jwt")

    mobile_secret = "mobile-app-secret-with-at-least-32-bytes"
    web_secret = "web-app-secret-key-with-at-least-32-bytes"

    codec = TokenCodec(
        config=TokenConfig(
            secret_key=[mobile_secret, web_secret],
            algorithm=["HS256", "HS256"],
            audience=["mobile-app", ["web-app", "admin-panel"]],
            lifetime=3600,
        ),
        logger=logger,
    )

    print("=" * 60)
    print("JWT Audience Validation Examples")
    print("=" * 60)

    # 1. Token for the mobile tenant (key 0)
    mobile = codec.encode({"sub": "user@example.com"})
    print(f"\n1. Mobile token aud: {mobile.payload['aud']}")
    print(f"   Verified by key: {codec.decode(mobile.token).key_index}")

    # 2. Token for the web tenant (key 1), audience is a list
    web = codec.encode({"sub": "user@example.com"}, key_index=1)
    print(f"\n2. Web token aud: {web.payload['aud']}")
    print(f"   Verified by key: {codec.decode(web.token).key_index}")

    # 3. Caller overrides the audience claim with one no key accepts
    foreign = codec.encode({"sub": "user@example.com", "aud": "partner-app"})
    print("\n3. Token with aud 'partner-app'")
    try:
        codec.decode(foreign.token)
    except VerificationError as exc:
        # Only the last key's error is reported (bad_signature from key 1)
        print(f"   Rejected: {exc.reason}")

    # 4. Audience check disabled for one call
    result = codec.decode(foreign.token, {"check_audience": False})
    print(f"\n4. Without audience check: aud={result.payload['aud']}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
