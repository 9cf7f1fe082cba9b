"""
Edit-distance string similarity.

Names compared here are short (well under a hundred characters), so the
full dynamic-programming matrix is used.
"""


def levenshtein_distance(a: str, b: str) -> int:
    """
    Classic Levenshtein distance with unit costs.

    The matrix has len(b) + 1 rows and len(a) + 1 columns.
    """
    rows = len(b) + 1
    cols = len(a) + 1
    matrix = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        matrix[i][0] = i
    for j in range(cols):
        matrix[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = min(
                    matrix[i - 1][j - 1] + 1,  # substitution
                    matrix[i][j - 1] + 1,      # insertion
                    matrix[i - 1][j] + 1,      # deletion
                )

    return matrix[rows - 1][cols - 1]


def similarity(a: str, b: str) -> float:
    """
    Similarity in [0, 1] derived from edit distance.

    1.0 means identical. Two empty strings are identical.
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - levenshtein_distance(a, b)) / longest
