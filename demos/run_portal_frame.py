# File: demos/run_portal_frame.py
"""
DEMO: PORTAL FRAME (GRAVITY + LATERAL LOADS)
============================================

PURPOSE:
--------
Analyse a single-bay portal frame whose beam carries a UDL and whose left
column carries a lateral point load, so the frame both bends and sways.

PHYSICAL PROBLEM:
-----------------
            B ========= 6 m, w = 10 kN/m ========= C
            |                                      |
    20 kN ->|  (at mid-height)                     |   4 m
            |                                      |
            A (fixed)                              D (fixed)

Unknowns: EIθB, EIθC and the sway EIδ (EI = 1, relative inertias).

ENGINEERING SIGNIFICANCE:
-------------------------
The lateral load breaks the symmetry: δ ≠ 0 and the base shears H1, H2 no
longer cancel. Horizontal equilibrium requires H1 + H2 + P = 0.
"""

from slopedeflect import analyze_frame


FRAME = {
    "columns": [
        {"length": 4.0, "momentOfInertia": 1.0, "supportType": "fixed",
         "loadType": "CENTER_POINT", "loadMagnitude": 20.0},
        {"length": 4.0, "momentOfInertia": 1.0, "supportType": "fixed",
         "loadType": "NONE", "loadMagnitude": 0.0},
    ],
    "beams": [
        {"length": 6.0, "momentOfInertia": 1.0, "loadType": "UDL", "loadMagnitude": 10.0},
    ],
}


def main():
    print("=" * 70)
    print("DEMO: PORTAL FRAME (GRAVITY + LATERAL LOADS)")
    print("=" * 70)
    print()

    result = analyze_frame(FRAME)
    data = result.to_dict()

    print("STEP 1: Slope-Deflection Equations")
    print("-" * 70)
    for eq in data["slopeDeflectionEquations"]:
        near, far = eq["memberLabel"]
        print(f"  M{near}{far} = {eq['startEquation']}")
        print(f"  M{far}{near} = {eq['endEquation']}")
    print()

    print("STEP 2: Joint and Shear Equations")
    print("-" * 70)
    for name, text in data["boundaryEquations"].items():
        print(f"  {name}: {text}")
    print(f"  shear: {data['shearEquation']}")
    print()

    print("STEP 3: Solution")
    print("-" * 70)
    for name, value in data["solution"].items():
        print(f"  EI·{name} = {value:.4f}")
    print()

    print("STEP 4: Final Moments")
    print("-" * 70)
    print(result.moments_table().to_string(index=False))
    print()

    print("STEP 5: Reactions")
    print("-" * 70)
    for name, value in data["reactions"].items():
        print(f"  {name} = {value:.3f} kN")
    P = FRAME["columns"][0]["loadMagnitude"]
    balance = result.reactions.horizontal_sum + P
    print(f"  H1 + H2 + P = {balance:.2e} {'✓' if abs(balance) < 1e-6 else '✗'}")
    print()

    print("STEP 6: Beam Diagram")
    print("-" * 70)
    beam = result.diagram("BC")
    print(f"  samples: {len(beam.x)}   max M: {beam.max_moment:.2f}   min M: {beam.min_moment:.2f} kN·m")
    print()

    print("=" * 70)
    print("DEMO COMPLETE")
    print("=" * 70)
    return result


if __name__ == "__main__":
    main()
