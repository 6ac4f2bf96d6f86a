# Affichage
BANNER_WIDTH = 51
BANNER_TITLE = "DSA Signature Verification"
OUTPUT_TITLE = "Output"

# Ordre de saisie des valeurs et invites correspondantes
INPUT_FIELDS = ("p", "q", "h", "x", "k", "hash1", "hash2")
PROMPTS = {
    "p": "p: ",
    "q": "q: ",
    "h": "h: ",
    "x": "x: ",
    "k": "k: ",
    "hash1": "H(M1) (vrai hash): ",
    "hash2": "H(M2) (faux hash): ",
}
FIRST_BLOCK_LABEL = "H(M1)"
SECOND_BLOCK_LABEL = "H(M2)"

# Validation stricte des paramètres (désactivée par défaut)
STRICT_VALIDATION = False

# Journalisation
LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
