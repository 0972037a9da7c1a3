VARIANT_ORDER = (1, 2, 4)
VARIANT_NAMES = {1: "Easy (1 suit)", 2: "Medium (2 suits)", 4: "Hard (4 suits)"}
