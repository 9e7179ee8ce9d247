"""
Flight planning calculations.

Leaf modules are pure functions over explicit inputs; planner composes
them into a FlightPlan.
"""

from .flight_level import (
    clamp_fl,
    non_rvsm_ladder,
    validate_fl,
    snap_fl,
    infer_direction,
    normalize_cruise_fl,
    recommend_cruise_fl,
)
from .profile import (
    estimate_climb,
    estimate_descent,
    cruise_time_hours,
    altitude_burn_factor,
    build_profile,
)
from .fuel import (
    trip_fuel_kg,
    trip_fuel_for_distance,
    block_fuel,
    reheat_guard,
    average_burn_kg_per_hour,
    endurance_check,
    fuel_capacity_check,
)
from .performance import (
    weight_scale,
    takeoff_speeds,
    landing_speeds,
    takeoff_feasible,
    landing_feasible,
    pick_longest_runway,
    find_runway,
    takeoff_weight_kg,
    landing_weight_kg,
)
from .route import TokenKind, tokenize_route, classify_token, route_distance_nm, detour_factor, RouteResolver
from .planner import PlanRequest, FlightPlan, RunwayPlan, FlightPlanner

__all__ = [
    'clamp_fl', 'non_rvsm_ladder', 'validate_fl', 'snap_fl', 'infer_direction',
    'normalize_cruise_fl', 'recommend_cruise_fl',
    'estimate_climb', 'estimate_descent', 'cruise_time_hours', 'altitude_burn_factor', 'build_profile',
    'trip_fuel_kg', 'trip_fuel_for_distance', 'block_fuel', 'reheat_guard',
    'average_burn_kg_per_hour', 'endurance_check', 'fuel_capacity_check',
    'weight_scale', 'takeoff_speeds', 'landing_speeds', 'takeoff_feasible', 'landing_feasible',
    'pick_longest_runway', 'find_runway', 'takeoff_weight_kg', 'landing_weight_kg',
    'TokenKind', 'tokenize_route', 'classify_token', 'route_distance_nm', 'detour_factor', 'RouteResolver',
    'PlanRequest', 'FlightPlan', 'RunwayPlan', 'FlightPlanner',
]
