import pytest

from dsa import (
    DegenerateSignatureError, DSA_derive_generator, DSA_public_key,
    DSA_sign_hash, DSA_verify_hash, H, validate_domain, validate_params
)
from models import Signature

## parameters from MODP Group 24 -- Extracted from RFC 5114
PARAM_P = 0x87A8E61DB4B6663CFFBBD19C651959998CEEF608660DD0F25D2CEED4435E3B00E00DF8F1D61957D4FAF7DF4561B2AA3016C3D91134096FAA3BF4296D830E9A7C209E0C6497517ABD5A8A9D306BCF67ED91F9E6725B4758C022E0B1EF4275BF7B6C5BFC11D45F9088B941F54EB1E59BB8BC39A0BF12307F5C4FDB70C581B23F76B63ACAE1CAA6B7902D52526735488A0EF13C6D9A51BFA4AB3AD8347796524D8EF6A167B5A41825D967E144E5140564251CCACB83E6B486F6B3CA3F7971506026C0B857F689962856DED4010ABD0BE621C3A3960A54E710C375F26375D7014103A4B54330C198AF126116D2276E11715F693877FAD7EF09CADB094AE91E1A1597

PARAM_Q = 0x8CF83642A709A097B447997640129DA299B1A47D1EB3750BA308B0FE64F5FBD3

PARAM_G = 0x3FB32C9B73134D0B2E77506660EDBD484CA7B18F21EF205407F4793A1A0BA12510DBC15077BE463FFF4FED4AAC0BB555BE3A6C1B0C6B47B1BC3773BF7E8C6F62901228F8C28CBB18A55AE31341000A650196F931C77A57F2DDF463E5E9EC144B777DE62AAAB8A8628AC376D282D6ED3864E67982428EBC831D14348F6F2F9193B5045AF2767164E1DFC967C1FB3F2E55A4BD1BFFE83B9C80D052B985D182EA0ADB2A3B7313D3FE14C8484B1E052588B9B7D2BBD2DF016199ECD06E1557CD0915B3353BBB64E0EC377FD028370DF92B52C7891428CDC67EB6184B523D1DB246C32F63078490F00EF8D647D148D47954515E2327CFEF98C582664B4C0F6CC41659

# Petit groupe de démonstration : q | p - 1
P, Q, SEED = 23, 11, 4
X, K = 3, 2


def test_derive_generator_and_public_key():
    g = DSA_derive_generator(P, Q, SEED)
    assert g == 16
    assert DSA_public_key(g, X, P) == 2
    assert validate_params(P, Q, g)


def test_validate_params():
    assert not validate_params(23, 11, 1)
    assert not validate_params(23, 11, 23)
    assert not validate_params(23, 11, 5)  # 5 est d'ordre 22
    assert not validate_params(23, 7, 16)  # 7 ne divise pas 22
    assert not validate_params(1, 11, 16)
    assert validate_params(PARAM_P, PARAM_Q, PARAM_G)


def test_sign_small_group():
    g = DSA_derive_generator(P, Q, SEED)
    assert DSA_sign_hash(5, X, K, P, Q, g) == Signature(3, 7)


def test_signature_does_not_transfer_to_other_hash():
    g = DSA_derive_generator(P, Q, SEED)
    y = DSA_public_key(g, X, P)
    signature = DSA_sign_hash(5, X, K, P, Q, g)

    first = DSA_verify_hash(P, Q, g, y, signature, 5)
    assert (first.w, first.u1, first.u2, first.v) == (8, 7, 2, 3)
    assert first.valid

    second = DSA_verify_hash(P, Q, g, y, signature, 9)
    assert (second.w, second.u1, second.u2, second.v) == (8, 6, 2, 5)
    assert not second.valid


def test_sign_then_verify_is_consistent():
    # p = 607, q = 101, g = 2^6 d'ordre 101
    p, q = 607, 101
    g = DSA_derive_generator(p, q, 2)
    assert validate_params(p, q, g)

    checked = 0
    for x in (1, 17, 58, 100):
        y = DSA_public_key(g, x, p)
        for k in range(1, q):
            for hash_value in (0, 42, 1000, 123456789):
                try:
                    signature = DSA_sign_hash(hash_value, x, k, p, q, g)
                except DegenerateSignatureError:
                    continue
                assert DSA_verify_hash(p, q, g, y, signature, hash_value).valid
                checked += 1
    assert checked > 1000


@pytest.mark.parametrize("hash_value, k, seed", [
    (2, 2, 4),    # s = 0
    (5, 11, 4),   # k non inversible modulo q
    (5, 2, 0),    # g = 0 donc r = 0
])
def test_degenerate_signature(hash_value, k, seed):
    g = DSA_derive_generator(P, Q, seed)
    with pytest.raises(DegenerateSignatureError):
        DSA_sign_hash(hash_value, X, k, P, Q, g)


def test_verify_rejects_non_invertible_s():
    # q = 10 composé : s = 4 n'a pas d'inverse
    verification = DSA_verify_hash(25, 10, 4, 16, Signature(3, 4), 5)
    assert verification.w is None
    assert (verification.u1, verification.u2, verification.v) == (None, None, None)
    assert not verification.valid


def test_validate_domain():
    assert validate_domain(23, 11)
    assert not validate_domain(23, 0)
    assert not validate_domain(0, 11)
    assert not validate_domain(23, 7)


def test_hash():
    assert H(b"abc") == 0xba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad


def test_sign_rfc5114_vector():
    # Valeurs spécifiées dans l'énoncé
    m = 'An important message !'
    k = 0x7e7f77278fe5232f30056200582ab6e7cae23992bca75929573b779c62ef4759
    x = 0x49582493d17932dabd014bb712fc55af453ebfb2767537007b0ccff6e857e6a3

    expected_r = 0x5ddf26ae653f5583e44259985262c84b483b74be46dec74b07906c5896e26e5a
    expected_s = 0x194101d2c55ac599e4a61603bc6667dcc23bd2e9bdbef353ec3cb839dcce6ec1

    h = H(str.encode(m)) % PARAM_Q
    r, s = DSA_sign_hash(h, x, k, PARAM_P, PARAM_Q, PARAM_G)

    assert r == expected_r
    assert s == expected_s
