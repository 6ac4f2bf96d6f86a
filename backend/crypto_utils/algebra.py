import logging
from typing import Optional

logger = logging.getLogger(__name__)


class NotInvertibleError(ValueError):
    """Levée quand un entier n'a pas d'inverse modulaire"""


def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """
    Exponentiation modulaire rapide (square-and-multiply)

    Args:
        base: La base b
        exponent: L'exposant e (positif ou nul)
        modulus: Le module m (m >= 1)

    Returns:
        int: b^e mod m
    """
    result = 1 % modulus
    base %= modulus  # réduit b si b >= m

    while exponent > 0:
        if exponent & 1:  # exposant impair
            result = (result * base) % modulus

        base = (base * base) % modulus
        exponent //= 2

    return result


def int_pow(base: int, exponent: int) -> int:
    """Exponentiation par carrés successifs, sans réduction modulaire"""
    result = 1

    while exponent > 0:
        if exponent & 1:
            result *= base

        base *= base
        exponent //= 2

    return result


def mod_inverse(a: int, modulus: int) -> Optional[int]:
    """
    Inverse modulaire par l'algorithme d'Euclide étendu

    Args:
        a: L'entier à inverser
        modulus: Le module m

    Returns:
        Optional[int]: x dans [0, m) tel que a*x = 1 (mod m),
        ou None si pgcd(a, m) != 1 ou si m == 1
    """
    m0 = modulus
    y, x = 0, 1  # coefficients de Bézout

    if modulus == 1:
        return None

    while a > 1:
        if modulus == 0:
            break

        quotient = a // modulus

        # le module devient le reste
        a, modulus = modulus, a % modulus

        x, y = y, x - quotient * y

    # a = pgcd(a, m) != 1 : pas d'inverse
    if a != 1:
        logger.debug("Pas d'inverse modulaire (module %d)", m0)
        return None

    if x < 0:
        x += m0

    return x


def mod_inv(a: int, modulus: int) -> int:
    """
    Inverse modulaire

    Raises:
        NotInvertibleError: Si a n'est pas inversible modulo m
    """
    inverse = mod_inverse(a, modulus)
    if inverse is None:
        raise NotInvertibleError(f"{a} n'est pas inversible modulo {modulus}")
    return inverse
