"""Example: Weighted additive DEA models.

This example demonstrates:
- Scoring DMUs with the MIP weighted additive model
- Comparing weighting schemes (Ones, MIP, Normalized, RAM, BAM)
- Constant vs variable returns to scale
- Benchmarking against a separate reference set
- Custom weights
"""

import numpy as np
from pydea import SolveFailedError, compute_weights, solve_additive

# Eleven units, two inputs (e.g. staff, floor space) and one output (sales)
X = np.array([
    [5, 13], [16, 12], [16, 26], [17, 15], [18, 14], [23, 6],
    [25, 10], [27, 22], [37, 14], [42, 25], [5, 17],
])
Y = np.array([12, 14, 25, 26, 8, 9, 27, 30, 31, 26, 12])

# =============================================================================
# Example 1: MIP model under variable returns to scale
# =============================================================================

print("=" * 60)
print("Example 1: Measure of Inefficiency Proportions (VRS)")
print("=" * 60)

result = solve_additive(X, Y, "MIP")
print(result)
print()
print(f"{'DMU':>4} {'efficiency':>11} {'slackX1':>9} {'slackX2':>9} {'slackY1':>9}")
for i in range(result.nobs()):
    sx = result.slacks("X")[i]
    sy = result.slacks("Y")[i]
    print(f"{i + 1:>4} {result.efficiency[i]:>11.6f} {sx[0]:>9.4f} {sx[1]:>9.4f} {sy[0]:>9.4f}")

# Peers: which efficient units define the target of each inefficient unit
print("\nPeers of inefficient units:")
for i in np.flatnonzero(~result.is_efficient):
    peers = {j + 1: round(w, 4) for j, w in result.peers(i).items()}
    print(f"  DMU {i + 1}: {peers}")

# =============================================================================
# Example 2: Weighting schemes
# =============================================================================

print("\n" + "=" * 60)
print("Example 2: Weighting Schemes")
print("=" * 60)

wX, wY = compute_weights(X, Y, "RAM")
print(f"RAM input weights (same for every DMU): {wX[0]}")
print(f"RAM output weights: {wY[0]}")

for model in ("Ones", "MIP", "Normalized", "RAM", "BAM"):
    for rts in ("VRS", "CRS"):
        res = solve_additive(X, Y, model, rts=rts)
        print(
            f"  {model:<10} {rts}: efficient units = {res.num_efficient:>2}, "
            f"mean score = {res.efficiency.mean():.4f}"
        )

# =============================================================================
# Example 3: Reference set
# =============================================================================

print("\n" + "=" * 60)
print("Example 3: Benchmarking Against a Reference Set")
print("=" * 60)

# Score three new units against the eleven observed ones
X_new = np.array([[10, 15], [30, 20], [20, 8]])
Y_new = np.array([15, 28, 20])
try:
    res = solve_additive(X_new, Y_new, "RAM", rts="CRS", Xref=X, Yref=Y)
    print(f"Scores: {np.round(res.efficiency, 4)}")
    print(f"Peer weights shape: {res.peer_weights.shape}")
except SolveFailedError as e:
    print(f"DMU {e.dmu_index} could not be evaluated: {e.reason}")

# =============================================================================
# Example 4: Custom weights
# =============================================================================

print("\n" + "=" * 60)
print("Example 4: Custom Weights")
print("=" * 60)

# Input savings count twice as much as output gains
wX = np.full(X.shape, 2.0)
wY = np.ones((len(Y), 1))
res = solve_additive(X, Y, "Custom", wX=wX, wY=wY)
print(f"Scores: {np.round(res.efficiency, 4)}")
print(f"Computation Time: {res.computation_time_ms:.2f} ms")
