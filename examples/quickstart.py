"""NEO Defense Quickstart — assess an impact and plan a deflection."""

from neodefense import (
    evaluate_scenario,
    impact_metrics,
    population_at_risk,
    recommend_defense,
    simulate,
)

# 370 m stony asteroid at 7.42 km/s striking Tokyo
effects = impact_metrics(0.37, 7.42, 35.7, 139.7)

print(f"Energy:      {effects.energy_mt:,.0f} Mt TNT")
print(f"Crater:      {effects.crater_diameter_km:.1f} km")
print(f"Magnitude:   Mw {effects.magnitude:.1f}")
print(f"Shaking:     {effects.shaking_radius_km} km")
print(f"Atmosphere:  {effects.atmospheric_effect}")
print(f"At risk:     {population_at_risk(35.7, 139.7, effects.shaking_radius_km):,}")

# Pick a deflection method with eight years of warning
plan = recommend_defense(effects.mass_kg, 8, is_hazardous=True)
config = plan.selection.config

print()
print(f"{plan.urgency}: {plan.summary}")
print(plan.threat_assessment)
print(plan.cost_summary)

outcome = simulate(
    config.delta_v_mm_s,
    8,
    effects.velocity_km_s,
    effects.mass_kg,
    plan.selection.method,
    spacecraft_mass_kg=config.spacecraft_mass_kg,
)
print(f"Miss distance: {outcome.miss_distance_km:,.0f} km ({outcome.miss_distance_ld:.2f} LD)")
print(f"Success:       {outcome.success_probability_pct:.0f}%")

# Preset scenarios
assessment = evaluate_scenario("asteroid-shower")
print()
print(f"{assessment.scenario.name}: {assessment.total_population_at_risk:,} at risk")
