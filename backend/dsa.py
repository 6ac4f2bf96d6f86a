import logging

from Crypto.Hash import SHA256

from crypto_utils.algebra import mod_exp, mod_inverse, mod_inv, int_pow, NotInvertibleError
from models import Signature, Verification

logger = logging.getLogger(__name__)


class DegenerateSignatureError(ValueError):
    """Signature dégénérée (r < 1, s < 1 ou k non inversible) : il faut un autre nonce"""


def validate_domain(p: int, q: int) -> bool:
    """Vérifie que q divise p-1, avant tout calcul qui divise par q"""
    if p < 2 or q < 2:
        return False

    return (p - 1) % q == 0


def validate_params(p: int, q: int, g: int) -> bool:
    """
    Vérifie que les paramètres DSA sont cohérents

    Aucun test de primalité n'est fait : seules la divisibilité de p-1 par q
    et l'ordre du générateur sont contrôlés.
    """
    if not validate_domain(p, q):
        return False

    if g <= 1 or g >= p:
        return False

    # Vérifie que g^q ≡ 1 (mod p)
    if mod_exp(g, q, p) != 1:
        return False

    return True


def H(message: bytes) -> int:
    """
    Fonction de hachage SHA-256 pour DSA

    Args:
        message: Le message à hacher

    Returns:
        int: Le hash du message
    """
    h = SHA256.new(message)
    return int(h.hexdigest(), 16)


def DSA_derive_generator(p: int, q: int, h: int) -> int:
    """Calcule le générateur du sous-groupe g = h^((p-1)/q) mod p"""
    return mod_exp(h, (p - 1) // q, p)


def DSA_public_key(g: int, x: int, p: int) -> int:
    """Calcule la clé publique y = g^x mod p"""
    return mod_exp(g, x, p)


def DSA_sign_hash(hash_value: int, private_key: int, k: int, p: int, q: int, g: int) -> Signature:
    """
    Signe un hash avec DSA et un nonce imposé

    Contrairement à une signature classique, le nonce k est fourni par
    l'appelant et aucune nouvelle tentative n'est faite.

    Args:
        hash_value: Le hash du message (non réduit)
        private_key: La clé privée x
        k: Le nonce
        p, q, g: Les paramètres DSA

    Returns:
        Signature: La signature (r, s)

    Raises:
        DegenerateSignatureError: Si k n'est pas inversible modulo q, ou si r ou s est nul
    """
    # r = (g^k mod p) mod q
    r = mod_exp(g, k, p) % q

    # s = k^(-1)(H(m) + x·r) mod q
    try:
        k_inv = mod_inv(k, q)
        s = (k_inv * (hash_value + private_key * r)) % q
    except NotInvertibleError:
        # k non inversible : traité comme s nul
        s = 0

    logger.debug("Signature: r=%d s=%d", r, s)

    if r < 1 or s < 1:
        logger.warning("Signature dégénérée (r=%d, s=%d) pour k=%d", r, s, k)
        raise DegenerateSignatureError("Signature invalide. Choisissez un autre nonce k.")

    return Signature(r, s)


def DSA_verify_hash(p: int, q: int, g: int, y: int, signature: Signature, hash_value: int) -> Verification:
    """
    Vérifie une signature DSA pour un hash donné

    Les puissances g^u1 et y^u2 sont calculées sans réduction, puis leur
    produit est réduit modulo p et enfin modulo q.

    Args:
        p, q, g: Les paramètres DSA
        y: La clé publique
        signature: La signature (r, s)
        hash_value: Le hash à vérifier

    Returns:
        Verification: w, u1, u2, v et le résultat v == r
        (w, u1, u2 et v à None si s n'est pas inversible modulo q)
    """
    r, s = signature

    # Calcule w = s^(-1) mod q
    w = mod_inverse(s, q)
    if w is None:
        logger.warning("s=%d n'est pas inversible modulo q=%d : signature rejetée", s, q)
        return Verification(None, None, None, None, False)

    # Calcule u1 = H(m)·w mod q et u2 = r·w mod q
    u1 = (hash_value * w) % q
    u2 = (r * w) % q

    # Calcule v = ((g^u1 * y^u2) mod p) mod q
    t1 = int_pow(g, u1)
    t2 = int_pow(y, u2)
    v = ((t1 * t2) % p) % q

    logger.debug("Vérification: w=%d u1=%d u2=%d v=%d", w, u1, u2, v)

    return Verification(w, u1, u2, v, v == r)
