import sys

import spider_rectgen as sr

# Parameter settings
CARDINALITY = 10_000
MAX_SIDE = 0.01

# 1. Generate one dataset per distribution
datasets = {
    "uniform": sr.generate_rectangles("uniform", CARDINALITY, MAX_SIDE, MAX_SIDE, seed=42),
    "diagonal": sr.generate_rectangles("diagonal", CARDINALITY, MAX_SIDE, MAX_SIDE, 0.5, 0.1, seed=42),
    "gaussian": sr.generate_rectangles("gaussian", CARDINALITY, MAX_SIDE, MAX_SIDE, seed=42),
    "sierpinsky": sr.generate_rectangles("sierpinsky", CARDINALITY, MAX_SIDE, MAX_SIDE, seed=42),
    "bit": sr.generate_rectangles("bit", CARDINALITY, MAX_SIDE, MAX_SIDE, 0.2, 10, seed=42),
    "parcel": sr.generate_rectangles("parcel", CARDINALITY, 0.2, 0.1, seed=42),
}

# 2. Access generation results
print("\n--- Dataset Summary ---")
for name, rects in datasets.items():
    c = rects.centers
    print(f"{name:<11} n={rects.n}  center mean=({c[:, 0].mean():.3f}, {c[:, 1].mean():.3f})  "
          f"mean area={(rects.rects[:, 2] * rects.rects[:, 3]).mean():.3e}")

# 3. Emit a few rectangles as WKT
print("\n--- First parcels ---")
sr.write_polygons(list(datasets["parcel"])[:3], sys.stdout)
