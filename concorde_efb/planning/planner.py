"""
Flight planner: composes route, flight level, profile, fuel, weights,
speeds, runway feasibility and weather into one FlightPlan.

Advisories (reheat over cap, short endurance, fuel over capacity, runway
too short, unresolved route tokens) are collected as warnings; only
caller errors such as an unknown departure airport raise.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..config import CONCORDE, DEFAULT_FUEL_POLICY, AircraftLimits, FuelPolicy, PlannerSettings
from ..exceptions import InvalidInputError
from ..models.airport import Airport
from ..models.flight_level import CruiseFLRecommendation, Direction, FlightLevelCheck
from ..models.navpoint import distance_nm as great_circle_distance
from ..models.ofp import OFPExtract
from ..models.performance import LandingSpeeds, RunwayFeasibility, TakeoffSpeeds
from ..models.profile import (
    EnduranceCheck,
    FlightLegProfile,
    FuelBreakdown,
    FuelCapacityCheck,
    ReheatSummary,
)
from ..models.reference import ReferenceData
from ..models.route import RouteResult
from ..models.runway import Runway
from ..utils.numbers import is_finite_number
from ..weather.analysis import wind_components
from ..weather.metar import decode_metar
from ..weather.models import MetarReport, WindComponentSummary
from .flight_level import infer_direction, normalize_cruise_fl, recommend_cruise_fl, validate_fl
from .fuel import (
    average_burn_kg_per_hour,
    block_fuel,
    endurance_check,
    fuel_capacity_check,
    reheat_guard,
    trip_fuel_kg,
)
from .performance import (
    find_runway,
    landing_feasible,
    landing_speeds,
    landing_weight_kg,
    takeoff_feasible,
    takeoff_speeds,
    takeoff_weight_kg,
)
from .profile import altitude_burn_factor, build_profile
from .route import RouteResolver

logger = logging.getLogger(__name__)


@dataclass
class PlanRequest:
    """
    Inputs for one planning run.

    Attributes:
        dep_icao: Departure airport
        arr_icao: Arrival airport
        route: Route string, resolved when distance_nm is not given
        distance_nm: Planned distance override
        cruise_fl: Requested cruise level, recommended when None
        alternate_icao: Alternate airport for the alternate fuel leg
        dep_runway: Departure runway, longest runway when None or unknown
        arr_runway: Arrival runway, longest runway when None or unknown
        dep_metar: Raw departure METAR
        arr_metar: Raw arrival METAR
        pax_count: Passengers, full cabin when None
        pax_mass_kg: Mass per passenger, standard mass when None
        fuel_policy: Taxi, contingency, final reserve and trim fuel
    """

    dep_icao: str
    arr_icao: str
    route: Optional[str] = None
    distance_nm: Optional[float] = None
    cruise_fl: Optional[float] = None
    alternate_icao: Optional[str] = None
    dep_runway: Optional[str] = None
    arr_runway: Optional[str] = None
    dep_metar: Optional[str] = None
    arr_metar: Optional[str] = None
    pax_count: Optional[int] = None
    pax_mass_kg: Optional[float] = None
    fuel_policy: FuelPolicy = DEFAULT_FUEL_POLICY

    @classmethod
    def from_ofp(cls, extract: OFPExtract, fuel_policy: FuelPolicy = DEFAULT_FUEL_POLICY) -> 'PlanRequest':
        """
        Build a request from an imported OFP.

        The OFP distance is kept only when there is no route to resolve.

        Raises:
            InvalidInputError: If the OFP has no origin or destination
        """
        if not extract.origin_icao or not extract.dest_icao:
            raise InvalidInputError(
                "OFP has no origin/destination",
                details={'origin': extract.origin_icao, 'destination': extract.dest_icao},
            )
        return cls(
            dep_icao=extract.origin_icao,
            arr_icao=extract.dest_icao,
            route=extract.route,
            distance_nm=None if extract.route else extract.distance_nm,
            cruise_fl=extract.cruise_fl,
            alternate_icao=extract.alternate_icao,
            dep_runway=extract.dep_runway,
            arr_runway=extract.arr_runway,
            dep_metar=extract.dep_metar,
            arr_metar=extract.arr_metar,
            pax_count=extract.pax_count,
            pax_mass_kg=extract.pax_weight_kg,
            fuel_policy=fuel_policy,
        )


@dataclass
class RunwayPlan:
    """Selected runway with its feasibility and wind components."""

    runway: Optional[Runway]
    feasibility: RunwayFeasibility
    wind: WindComponentSummary = field(default_factory=WindComponentSummary)

    def to_dict(self) -> dict:
        return {
            'runway': self.runway.to_dict() if self.runway else None,
            'feasibility': self.feasibility.to_dict(),
            'wind': self.wind.to_dict(),
        }


@dataclass
class FlightPlan:
    """Result of a planning run."""

    departure: Airport
    arrival: Airport
    distance_nm: float
    direction: Optional[Direction]
    cruise_fl: int
    fl_check: FlightLevelCheck
    profile: FlightLegProfile
    reheat: ReheatSummary
    fuel: FuelBreakdown
    total_fuel_kg: float
    capacity: FuelCapacityCheck
    avg_burn_kg_per_hour: float
    endurance: EnduranceCheck
    takeoff_weight_kg: float
    landing_weight_kg: float
    takeoff_speeds: TakeoffSpeeds
    landing_speeds: LandingSpeeds
    takeoff: RunwayPlan
    landing: RunwayPlan
    alternate_nm: float = 0.0
    route: Optional[RouteResult] = None
    recommendation: Optional[CruiseFLRecommendation] = None
    dep_weather: Optional[MetarReport] = None
    arr_weather: Optional[MetarReport] = None
    notices: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ete_hours(self) -> float:
        return self.profile.total_time_h

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            'departure': self.departure.ident,
            'arrival': self.arrival.ident,
            'distance_nm': self.distance_nm,
            'alternate_nm': self.alternate_nm,
            'direction': self.direction.value if self.direction else None,
            'cruise_fl': self.cruise_fl,
            'fl_check': {
                'ok': self.fl_check.ok,
                'violation': self.fl_check.violation.value if self.fl_check.violation else None,
                'suggestions': list(self.fl_check.suggestions),
            },
            'recommendation': self.recommendation.to_dict() if self.recommendation else None,
            'route': self.route.to_dict() if self.route else None,
            'profile': self.profile.to_dict(),
            'ete_hours': self.ete_hours,
            'reheat': self.reheat.to_dict(),
            'fuel': self.fuel.to_dict(),
            'total_fuel_kg': self.total_fuel_kg,
            'capacity': self.capacity.to_dict(),
            'avg_burn_kg_per_hour': self.avg_burn_kg_per_hour,
            'endurance': self.endurance.to_dict(),
            'takeoff_weight_kg': self.takeoff_weight_kg,
            'landing_weight_kg': self.landing_weight_kg,
            'takeoff_speeds': self.takeoff_speeds.to_dict(),
            'landing_speeds': self.landing_speeds.to_dict(),
            'takeoff': self.takeoff.to_dict(),
            'landing': self.landing.to_dict(),
            'dep_weather': self.dep_weather.to_dict() if self.dep_weather else None,
            'arr_weather': self.arr_weather.to_dict() if self.arr_weather else None,
            'notices': list(self.notices),
            'warnings': list(self.warnings),
        }


class FlightPlanner:
    """
    Plan a flight against reference data.

    Example:
        planner = FlightPlanner(reference)
        plan = planner.plan(PlanRequest(dep_icao="EGLL", arr_icao="KJFK", route="CPT 50.0,-20.0"))
        print(plan.cruise_fl, plan.fuel.block_kg, plan.warnings)
    """

    def __init__(
        self,
        reference: ReferenceData,
        settings: Optional[PlannerSettings] = None,
        aircraft: AircraftLimits = CONCORDE,
    ):
        self.reference = reference
        self.settings = settings or PlannerSettings()
        self.aircraft = aircraft
        self.resolver = RouteResolver(reference, self.settings.direction_strategy)

    def _airport(self, icao: str, role: str) -> Airport:
        airport = self.reference.airport(icao)
        if airport is None:
            raise InvalidInputError(f"Unknown {role} airport", details=icao)
        return airport

    def plan(self, request: PlanRequest) -> FlightPlan:
        """
        Run the full planning chain for a request.

        Raises:
            InvalidInputError: Unknown departure/arrival airport, or no way
                to determine the distance
        """
        dep = self._airport(request.dep_icao, "departure")
        arr = self._airport(request.arr_icao, "arrival")
        warnings: List[str] = []
        notices: List[str] = []

        route = None
        if request.distance_nm is not None:
            if not is_finite_number(request.distance_nm):
                raise InvalidInputError("Distance must be a finite number", details=request.distance_nm)
            distance = max(float(request.distance_nm), 0.0)
        elif request.route:
            route = self.resolver.resolve(request.route, dep.ident, arr.ident)
            distance = route.distance_nm
            notices.append(route.summary())
            if route.resolution.recognized.unresolved:
                warnings.append(
                    f"Unresolved route tokens ignored: {' '.join(route.resolution.recognized.unresolved)}"
                )
            if route.approximate:
                warnings.append("Route distance is approximate (airways/procedures not expanded).")
        else:
            distance = great_circle_distance(dep.navpoint, arr.navpoint)
            notices.append(f"No route given, using great-circle distance {distance:,.0f} NM.")

        direction = infer_direction(dep.navpoint, arr.navpoint, self.settings.direction_strategy)

        recommendation = None
        if request.cruise_fl is None:
            recommendation = recommend_cruise_fl(
                distance,
                direction,
                min_cruise_minutes=self.settings.min_cruise_minutes,
                target_cruise_minutes=self.settings.target_cruise_minutes,
                objective=self.settings.recommend_objective,
                aircraft=self.aircraft,
            )
            cruise_fl = recommendation.fl
            notices.append(f"Auto-selected cruise FL{cruise_fl} ({direction.label}). {recommendation.note}")
            if not recommendation.meets_minimum:
                warnings.append(recommendation.note)
        else:
            cruise_fl, fl_notices = normalize_cruise_fl(request.cruise_fl, direction, self.settings.snap_tie_break)
            notices.extend(fl_notices)
        fl_check = validate_fl(cruise_fl, direction)

        profile = build_profile(distance, cruise_fl, self.aircraft.cruise_tas_kt)
        reheat = reheat_guard(profile.climb.time_h, self.aircraft.reheat_minutes_cap)
        if not reheat.within_cap:
            warnings.append(
                f"Reheat climb {reheat.requested_minutes} min exceeds the {reheat.cap_minutes} min cap."
            )

        trip_kg = trip_fuel_kg(
            profile,
            self.aircraft.burn_kg_per_nm * altitude_burn_factor(cruise_fl),
            climb_factor=self.aircraft.climb_factor,
            descent_factor=self.aircraft.descent_factor,
        )
        alternate_nm = self._alternate_distance(arr, request.alternate_icao, warnings)
        policy = request.fuel_policy
        fuel = block_fuel(
            trip_kg,
            taxi_kg=policy.taxi_kg,
            contingency_pct=policy.contingency_pct,
            final_reserve_kg=policy.final_reserve_kg,
            alternate_nm=alternate_nm,
            burn_kg_per_nm=self.aircraft.burn_kg_per_nm,
        )
        total_fuel = fuel.block_kg + (policy.trim_tank_kg or 0.0)
        capacity = fuel_capacity_check(total_fuel, self.aircraft.fuel_capacity_kg)
        if not capacity.within_capacity:
            warnings.append(
                f"Total fuel {total_fuel:,.0f} kg exceeds capacity "
                f"{capacity.capacity_kg:,.0f} kg by {capacity.excess_kg:,.0f} kg."
            )

        avg_burn = average_burn_kg_per_hour(trip_kg, profile.total_time_h, cruise_fl, self.aircraft)
        endurance = endurance_check(
            max(total_fuel - fuel.taxi_kg, 0.0), avg_burn, profile.total_time_h, fuel)
        if not endurance.meets:
            warnings.append(
                f"Endurance {endurance.endurance_hours:.2f} h is below ETE plus reserves "
                f"{endurance.required_hours:.2f} h."
            )

        tow = takeoff_weight_kg(total_fuel, request.pax_count, request.pax_mass_kg, self.aircraft)
        lw = landing_weight_kg(tow, trip_kg)

        dep_weather = decode_metar(request.dep_metar) if request.dep_metar else None
        arr_weather = decode_metar(request.arr_metar) if request.arr_metar else None
        takeoff = self._runway_plan(
            dep, request.dep_runway, takeoff_feasible, tow, dep_weather, "Departure", warnings)
        landing = self._runway_plan(
            arr, request.arr_runway, landing_feasible, lw, arr_weather, "Arrival", warnings)

        plan = FlightPlan(
            departure=dep,
            arrival=arr,
            distance_nm=distance,
            direction=direction,
            cruise_fl=cruise_fl,
            fl_check=fl_check,
            profile=profile,
            reheat=reheat,
            fuel=fuel,
            total_fuel_kg=total_fuel,
            capacity=capacity,
            avg_burn_kg_per_hour=avg_burn,
            endurance=endurance,
            takeoff_weight_kg=tow,
            landing_weight_kg=lw,
            takeoff_speeds=takeoff_speeds(tow),
            landing_speeds=landing_speeds(lw, self.settings.landing_calibration),
            takeoff=takeoff,
            landing=landing,
            alternate_nm=alternate_nm,
            route=route,
            recommendation=recommendation,
            dep_weather=dep_weather,
            arr_weather=arr_weather,
            notices=notices,
            warnings=warnings,
        )
        logger.info(
            f"Planned {dep.ident}-{arr.ident}: {distance:,.0f} NM FL{cruise_fl} "
            f"block {fuel.block_kg:,.0f} kg, {len(warnings)} warnings"
        )
        return plan

    def _alternate_distance(self, arrival: Airport, alternate_icao: Optional[str], warnings: List[str]) -> float:
        if not alternate_icao:
            return 0.0
        alternate = self.reference.airport(alternate_icao)
        if alternate is None:
            warnings.append(f"Alternate {alternate_icao} not found, no alternate fuel planned.")
            return 0.0
        return great_circle_distance(arrival.navpoint, alternate.navpoint)

    def _runway_plan(self, airport, runway_id, check, weight_kg, weather, role, warnings) -> RunwayPlan:
        runway = find_runway(airport, runway_id)
        if runway_id and (runway is None or runway.id.upper() != runway_id.upper()):
            warnings.append(f"{role} runway {runway_id} not found at {airport.ident}.")
        feasibility = check(runway.length_m if runway else 0.0, weight_kg, self.aircraft)
        if not feasibility.feasible:
            label = f"{airport.ident} {runway.id}" if runway else airport.ident
            warnings.append(f"{role} runway {label} not feasible: {feasibility.reason()}")

        wind = WindComponentSummary()
        if runway is not None and weather is not None:
            wind = wind_components(weather.wind.dir_deg, weather.wind.speed_kt, runway.heading_deg)
            if not wind.within_limits():
                warnings.append(
                    f"{role} wind on {runway.id}: headwind {wind.headwind_kt} kt, "
                    f"crosswind {wind.crosswind_kt} kt {wind.crosswind_dir or ''}".rstrip() + "."
                )
        return RunwayPlan(runway=runway, feasibility=feasibility, wind=wind)
