# File: demos/run_continuous_beam.py
"""
DEMO: THREE-SPAN CONTINUOUS BEAM (UDL ON EVERY SPAN)
====================================================

PURPOSE:
--------
Walk one continuous beam through the whole slope-deflection pipeline and print
every intermediate result: fixed-end moments, the slope-deflection equations,
the joint equations, the solved rotations, final moments, reactions and the
critical points of the bending moment diagram.

PHYSICAL PROBLEM:
-----------------
    A (fixed) ---- 6 m ---- B (hinged) ---- 6 m ---- C (hinged) ---- 6 m ---- D (fixed)
    w = 10 kN/m on every span

THEORETICAL BACKGROUND:
-----------------------
Every span carries the same load and A and D are fixed, so by symmetry the
interior supports do not rotate (θB = θC = 0) and every span behaves like a
fixed-fixed beam: end moments ±wL²/12 = ±30 kN·m, reactions 30/60/60/30 kN.
"""

from slopedeflect import analyze_beam


BEAM = {
    "modulusOfElasticity": 1.0,
    "momentOfInertia": 1.0,
    "numberOfSpans": 3,
    "spans": [
        {"length": 6.0, "loadType": "udl", "loadMagnitude": 10.0,
         "startSupport": "fixed", "endSupport": "hinged"},
        {"length": 6.0, "loadType": "udl", "loadMagnitude": 10.0,
         "startSupport": "hinged", "endSupport": "hinged"},
        {"length": 6.0, "loadType": "udl", "loadMagnitude": 10.0,
         "startSupport": "hinged", "endSupport": "fixed"},
    ],
    "sinkingSupports": [0.0, 0.0, 0.0, 0.0],
}


def main():
    print("=" * 70)
    print("DEMO: THREE-SPAN CONTINUOUS BEAM")
    print("=" * 70)
    print()

    result = analyze_beam(BEAM)
    data = result.to_dict()

    print("STEP 1: Fixed-End Moments")
    print("-" * 70)
    for label, fem in data["fixedEndMoments"].items():
        print(f"  {label}: start {fem['start']:8.2f}   end {fem['end']:8.2f} kN·m")
    print()

    print("STEP 2: Slope-Deflection Equations")
    print("-" * 70)
    for eq in data["slopeDeflectionEquations"]:
        near, far = eq["memberLabel"]
        print(f"  M{near}{far} = {eq['startEquation']}")
        print(f"  M{far}{near} = {eq['endEquation']}")
    print()

    print("STEP 3: Joint Equations and Solution")
    print("-" * 70)
    for name, text in data["boundaryEquations"].items():
        print(f"  {name}: {text}")
    for name, value in data["solution"].items():
        print(f"  {name} = {value:.4f}")
    print()

    print("STEP 4: Final Moments")
    print("-" * 70)
    print(result.moments_table().to_string(index=False))
    print()

    print("STEP 5: Reactions")
    print("-" * 70)
    total_load = sum(s["loadMagnitude"] * s["length"] for s in BEAM["spans"])
    for name, value in data["reactions"].items():
        print(f"  {name} = {value:.2f} kN")
    print(f"  Sum of reactions: {result.total_reaction:.2f} kN")
    print(f"  Applied load:     {total_load:.2f} kN")
    print(f"  Balance: {'✓' if abs(result.total_reaction - total_load) < 1e-3 else '✗'}")
    print()

    print("STEP 6: Critical Points")
    print("-" * 70)
    for cp in result.critical_points:
        print(f"  {cp.location:<32} x={cp.position:6.2f} m   "
              f"M={cp.bending_moment:8.2f} kN·m   V={cp.shear_force:8.2f} kN")
    print()

    print("=" * 70)
    print("DEMO COMPLETE")
    print("=" * 70)
    return result


if __name__ == "__main__":
    main()
