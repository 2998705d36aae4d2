"""
Edit distance used to rank suggestions.

Comparison is case-sensitive, unlike dictionary lookup.
"""


def levenshtein(a: str, b: str) -> int:
    """
    Calculate Levenshtein edit distance between two strings.

    Uses a single row of len(b) + 1 cells that is rewritten in place
    for each character of ``a``.
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    row = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        diagonal = row[0]
        row[0] = i
        for j, cb in enumerate(b, 1):
            above = row[j]
            cost = 0 if ca == cb else 1
            row[j] = min(above + 1, row[j - 1] + 1, diagonal + cost)
            diagonal = above

    return row[-1]
