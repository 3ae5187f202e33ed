import logging

import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from jwtkeyring import TokenConfig, load_token_config_from_dict

TEST_SECRET = "test-secret-a-0123456789abcdef0123456789abcdef0123456789abcdef"


@pytest.fixture()
def logger() -> logging.Logger:
    logger = logging.getLogger("jwtkeyring-tests")
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger


@pytest.fixture()
def config() -> TokenConfig:
    return load_token_config_from_dict({"SECRET_KEY": TEST_SECRET})


@pytest.fixture(scope="session")
def rsa_key_pair():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return private_key, private_key.public_key()
