"""String similarity used to pair company names across systems."""

# Returned when one normalised name contains the other ("Google" / "Google LLC").
CONTAINMENT_SCORE = 0.9


def fuzzy_match(first: str, second: str) -> float:
    """Return a similarity score in [0, 1] for two company names.

    Both names are lowercased and stripped. Identical names score 1.0, a
    name contained in the other scores 0.9, anything else scores
    ``1 - edit_distance / longest_length``.
    """
    s1 = first.lower().strip()
    s2 = second.lower().strip()

    if s1 == s2:
        return 1.0
    if s1 in s2 or s2 in s1:
        return CONTAINMENT_SCORE

    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 1.0

    return 1 - levenshtein_distance(s1, s2) / max_len


def levenshtein_distance(first: str, second: str) -> int:
    """Unit-cost edit distance (insert, delete, substitute)."""
    m = len(first)
    n = len(second)
    dp = [[0] * (n + 1) for _ in range(m + 1)]

    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if first[i - 1] == second[j - 1]:
                dp[i][j] = dp[i - 1][j - 1]
            else:
                dp[i][j] = 1 + min(dp[i - 1][j], dp[i][j - 1], dp[i - 1][j - 1])

    return dp[m][n]
