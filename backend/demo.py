"""
Démonstration : une signature DSA calculée pour un hash ne vérifie pas un autre hash.

On signe H(M1) avec un nonce k imposé, puis on vérifie la même signature
(r, s) d'abord avec H(M1), ensuite avec H(M2).
"""

import argparse
import logging
import sys
from typing import Dict, Iterator, List, Optional, TextIO, Tuple

from pydantic import ValidationError

import config
from dsa import (
    DegenerateSignatureError, DSA_derive_generator, DSA_public_key,
    DSA_sign_hash, DSA_verify_hash, H, validate_domain, validate_params
)
from models import DemoInput, DemoReport, Verification

logger = logging.getLogger(__name__)


def derive_keys(values: DemoInput, strict: bool = config.STRICT_VALIDATION) -> Tuple[int, int]:
    """
    Calcule le générateur g et la clé publique y

    Raises:
        ValueError: Si strict et les paramètres sont invalides
    """
    p, q = values.p, values.q

    # En mode strict, q doit diviser p-1 avant de calculer (p-1)/q
    if strict and not validate_domain(p, q):
        raise ValueError("Paramètres DSA invalides")

    g = DSA_derive_generator(p, q, values.h)
    y = DSA_public_key(g, values.x, p)
    logger.debug("g=%d y=%d", g, y)

    if strict and not validate_params(p, q, g):
        raise ValueError("Paramètres DSA invalides")

    return g, y


def sign_and_verify(values: DemoInput, g: int, y: int) -> DemoReport:
    """
    Signe hash1 puis vérifie la signature avec hash1 et avec hash2

    Raises:
        DegenerateSignatureError: Si la signature est dégénérée
    """
    p, q = values.p, values.q

    signature = DSA_sign_hash(values.hash1, values.x, values.k, p, q, g)

    # La signature de H(M1) est valide pour H(M1)...
    first = DSA_verify_hash(p, q, g, y, signature, values.hash1)
    # ... mais pas pour H(M2)
    second = DSA_verify_hash(p, q, g, y, signature, values.hash2)

    return DemoReport(g=g, y=y, r=signature.r, s=signature.s, first=first, second=second)


def run_demo(values: DemoInput, strict: bool = config.STRICT_VALIDATION) -> DemoReport:
    """
    Calcule g, y, la signature de hash1 puis les deux vérifications

    Args:
        values: Les sept entiers saisis
        strict: Si True, vérifie d'abord la cohérence des paramètres

    Returns:
        DemoReport: Toutes les valeurs calculées

    Raises:
        ValueError: Si strict et les paramètres sont invalides
        DegenerateSignatureError: Si la signature est dégénérée
    """
    g, y = derive_keys(values, strict)
    return sign_and_verify(values, g, y)


def print_banner(out: Optional[TextIO] = None) -> None:
    rule = "-" * config.BANNER_WIDTH
    print(rule, file=out)
    print(config.BANNER_TITLE.center(config.BANNER_WIDTH), file=out)
    print(rule + "\n", file=out)


def _tokens(stream: TextIO) -> Iterator[str]:
    # Valeurs séparées par des blancs ou une par ligne
    for line in stream:
        yield from line.split()


def read_values(fields: List[str], stream: Optional[TextIO] = None, out: Optional[TextIO] = None) -> Dict[str, str]:
    """Invite et lit les valeurs demandées, dans l'ordre"""
    print("Veuillez saisir les valeurs suivantes :\n", file=out)
    tokens = _tokens(stream if stream is not None else sys.stdin)
    values = {}
    for name in fields:
        print(config.PROMPTS[name], end="", file=out, flush=True)
        token = next(tokens, None)
        if token is None:
            raise EOFError(f"valeur manquante pour {name}")
        values[name] = token
    return values


def _format_value(value: Optional[int]) -> str:
    # None : pas d'inverse modulaire
    return "none" if value is None else str(value)


def _format_verification(label: str, verification: Verification) -> str:
    return (
        f"\n{label}:\n"
        f"w: {_format_value(verification.w)}\n"
        f"u1: {_format_value(verification.u1)}\n"
        f"u2: {_format_value(verification.u2)}\n"
        f"v: {_format_value(verification.v)}\n"
        f"v == r: {str(verification.valid).lower()}"
    )


def print_keys(g: int, y: int, out: Optional[TextIO] = None) -> None:
    """Affiche l'en-tête du rapport, g et y"""
    print(f"\n{config.OUTPUT_TITLE.center(config.BANNER_WIDTH - 1, '-')}\n", file=out)
    print(f"g: {g}", file=out)
    print(f"y: {y}", file=out)


def print_signature(report: DemoReport, out: Optional[TextIO] = None) -> None:
    """Affiche la signature et les deux vérifications"""
    print(f"r: {report.r}", file=out)
    print(f"s: {report.s}", file=out)
    print(_format_verification(config.FIRST_BLOCK_LABEL, report.first), file=out)
    print(_format_verification(config.SECOND_BLOCK_LABEL, report.second), file=out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dsa-verification",
        description="Vérification de signature DSA : une signature de H(M1) ne vérifie pas H(M2)"
    )
    parser.add_argument("values", nargs="*", metavar="N",
                        help="p q h x k H(M1) H(M2) (lus sur l'entrée standard si absents)")
    parser.add_argument("--message1", help="Message réel, haché en SHA-256 à la place de H(M1)")
    parser.add_argument("--message2", help="Faux message, haché en SHA-256 à la place de H(M2)")
    parser.add_argument("--strict", action="store_true", default=config.STRICT_VALIDATION,
                        help="Vérifie la cohérence de p, q et g avant de signer")
    parser.add_argument("--json", action="store_true", help="Affiche le rapport en JSON")
    parser.add_argument("--log-level", default=config.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Niveau de journalisation")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format=config.LOG_FORMAT, stream=sys.stderr)

    # Entiers de taille arbitraire, y compris au-delà de 4300 chiffres (Python >= 3.11)
    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)

    use_messages = args.message1 is not None or args.message2 is not None
    if use_messages and (args.message1 is None or args.message2 is None):
        parser.error("--message1 et --message2 vont ensemble")

    fields = list(config.INPUT_FIELDS[:5] if use_messages else config.INPUT_FIELDS)
    # Rapport JSON : pas de bannière ni d'invites sur la sortie standard
    out = sys.stderr if args.json else sys.stdout

    if not args.json:
        print_banner(out)

    try:
        if args.values:
            if len(args.values) != len(fields):
                parser.error(f"{len(fields)} valeurs attendues, {len(args.values)} reçues")
            raw = dict(zip(fields, args.values))
        else:
            raw = read_values(fields, sys.stdin, out)

        if use_messages:
            raw["hash1"] = H(args.message1.encode())
            raw["hash2"] = H(args.message2.encode())

        values = DemoInput(**raw)
    except (EOFError, ValidationError) as e:
        print(f"Saisie invalide : {e}", file=sys.stderr)
        return 1

    try:
        g, y = derive_keys(values, strict=args.strict)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1

    if not args.json:
        print_keys(g, y)

    try:
        report = sign_and_verify(values, g, y)
    except DegenerateSignatureError as e:
        print(str(e), file=sys.stderr)
        return 1

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        print_signature(report)

    return 0


if __name__ == "__main__":
    sys.exit(main())
