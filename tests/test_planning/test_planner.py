import json
import pytest

from concorde_efb.config import CONCORDE, FuelPolicy, PlannerSettings, RecommendObjective
from concorde_efb.exceptions import InvalidInputError
from concorde_efb.models.flight_level import Direction
from concorde_efb.models.ofp import OFPExtract
from concorde_efb.planning.planner import FlightPlanner, PlanRequest


@pytest.fixture
def planner(reference):
    return FlightPlanner(reference)


class TestPlanRequestFromOFP:

    def test_route_takes_precedence_over_distance(self):
        extract = OFPExtract(origin_icao='EGLL', dest_icao='KJFK', route='CPT STU',
                             distance_nm=3100, cruise_fl=580, pax_count=90)
        request = PlanRequest.from_ofp(extract)
        assert request.dep_icao == 'EGLL'
        assert request.arr_icao == 'KJFK'
        assert request.route == 'CPT STU'
        assert request.distance_nm is None
        assert request.cruise_fl == 580
        assert request.pax_count == 90

    def test_distance_kept_without_route(self):
        request = PlanRequest.from_ofp(OFPExtract(origin_icao='EGLL', dest_icao='KJFK', distance_nm=3100))
        assert request.distance_nm == 3100

    def test_missing_destination(self):
        with pytest.raises(InvalidInputError):
            PlanRequest.from_ofp(OFPExtract(origin_icao='EGLL', route='CPT'))


class TestFlightPlanner:

    def test_transatlantic_plan(self, planner):
        plan = planner.plan(PlanRequest(dep_icao='EGLL', arr_icao='KJFK', route='EGLL/27R CPT STU KJFK'))
        assert plan.direction == Direction.WEST
        assert plan.cruise_fl == 590
        assert plan.fl_check.ok
        assert plan.recommendation is not None and plan.recommendation.meets_minimum
        assert plan.distance_nm == pytest.approx(plan.route.raw_nm)
        assert plan.reheat.within_cap
        assert plan.capacity.within_capacity
        assert plan.endurance.meets
        assert plan.takeoff_weight_kg < CONCORDE.mtow_kg
        assert plan.landing_weight_kg == pytest.approx(plan.takeoff_weight_kg - plan.fuel.trip_kg)
        assert plan.takeoff.runway.id == '09L'
        assert plan.landing.runway.id == '13R'
        assert plan.warnings == []
        assert plan.ete_hours == pytest.approx(plan.profile.total_time_h)

    def test_fuel_components_add_up(self, planner):
        policy = FuelPolicy(taxi_kg=2000, contingency_pct=3, final_reserve_kg=4000, trim_tank_kg=5000)
        plan = planner.plan(PlanRequest(dep_icao='EGLL', arr_icao='KJFK', route='CPT STU',
                                        alternate_icao='KBOS', fuel_policy=policy))
        fuel = plan.fuel
        assert plan.alternate_nm > 0
        assert fuel.alternate_kg == pytest.approx(plan.alternate_nm * CONCORDE.burn_kg_per_nm)
        assert fuel.contingency_kg == pytest.approx(fuel.trip_kg * 0.03)
        assert fuel.block_kg == pytest.approx(
            fuel.trip_kg + 2000 + fuel.contingency_kg + 4000 + fuel.alternate_kg)
        assert plan.total_fuel_kg == pytest.approx(fuel.block_kg + 5000)

    def test_distance_override(self, planner):
        plan = planner.plan(PlanRequest(dep_icao='EGLL', arr_icao='KJFK', route='CPT STU', distance_nm=3200))
        assert plan.distance_nm == 3200
        assert plan.route is None

    def test_great_circle_without_route(self, planner):
        plan = planner.plan(PlanRequest(dep_icao='EGLL', arr_icao='KJFK'))
        assert any(n.startswith('No route given') for n in plan.notices)
        assert plan.distance_nm == pytest.approx(2995, abs=30)

    def test_requested_level_snapped_to_ladder(self, planner):
        plan = planner.plan(PlanRequest(dep_icao='EGLL', arr_icao='KJFK', distance_nm=3000, cruise_fl=580))
        assert plan.cruise_fl == 590
        assert plan.recommendation is None
        assert 'Adjusted to Non-RVSM FL590 (Westbound).' in plan.notices

    def test_eastbound_requested_level(self, planner):
        plan = planner.plan(PlanRequest(dep_icao='KJFK', arr_icao='EGLL', distance_nm=3000, cruise_fl=600))
        assert plan.direction == Direction.EAST
        assert plan.cruise_fl == 570
        assert plan.fl_check.ok

    def test_fuel_over_capacity(self, planner):
        plan = planner.plan(PlanRequest(dep_icao='EGLL', arr_icao='KJFK', distance_nm=4500))
        assert not plan.capacity.within_capacity
        assert plan.takeoff_weight_kg == CONCORDE.mtow_kg
        assert any('exceeds capacity' in w for w in plan.warnings)

    def test_short_runway(self, planner):
        plan = planner.plan(PlanRequest(dep_icao='LFPN', arr_icao='EGLL'))
        assert not plan.takeoff.feasibility.feasible
        assert any('LFPN 07L not feasible' in w for w in plan.warnings)

    def test_unknown_runway(self, planner):
        plan = planner.plan(PlanRequest(dep_icao='EGLL', arr_icao='KJFK', distance_nm=3000, dep_runway='99'))
        assert plan.takeoff.runway.id == '09L'
        assert 'Departure runway 99 not found at EGLL.' in plan.warnings

    def test_arrival_crosswind(self, planner):
        plan = planner.plan(PlanRequest(
            dep_icao='EGLL', arr_icao='KJFK', distance_nm=3000, arr_runway='04L',
            arr_metar='KJFK 121251Z 31035G45KT 10SM FEW250 20/05 A3010',
        ))
        wind = plan.landing.wind
        assert wind.crosswind_kt == pytest.approx(35, abs=0.5)
        assert wind.crosswind_dir == 'L'
        assert plan.arr_weather.qnh_hpa == 1019
        assert any(w.startswith('Arrival wind on 04L') for w in plan.warnings)

    def test_unknown_alternate(self, planner):
        plan = planner.plan(PlanRequest(dep_icao='EGLL', arr_icao='KJFK', distance_nm=3000, alternate_icao='ZZZZ'))
        assert plan.alternate_nm == 0.0
        assert 'Alternate ZZZZ not found, no alternate fuel planned.' in plan.warnings

    def test_unresolved_route_tokens_warn(self, planner):
        plan = planner.plan(PlanRequest(dep_icao='EGLL', arr_icao='KJFK', route='CPT NOTAFIX STU'))
        assert any('NOTAFIX' in w for w in plan.warnings)

    def test_unknown_departure(self, planner):
        with pytest.raises(InvalidInputError):
            planner.plan(PlanRequest(dep_icao='ZZZZ', arr_icao='KJFK'))

    def test_non_finite_distance(self, planner):
        with pytest.raises(InvalidInputError):
            planner.plan(PlanRequest(dep_icao='EGLL', arr_icao='KJFK', distance_nm=float('inf')))

    def test_fuel_objective(self, reference):
        settings = PlannerSettings().with_overrides(recommend_objective=RecommendObjective.FUEL)
        plan = FlightPlanner(reference, settings).plan(PlanRequest(dep_icao='EGLL', arr_icao='KJFK'))
        assert plan.recommendation.meets_minimum
        assert plan.fl_check.ok

    def test_to_dict_is_json_serializable(self, planner):
        plan = planner.plan(PlanRequest(
            dep_icao='EGLL', arr_icao='KJFK', route='CPT UL9 STU',
            dep_metar='EGLL 121250Z 27015KT 9999 SCT030 15/08 Q1012',
        ))
        data = json.loads(json.dumps(plan.to_dict()))
        assert data['departure'] == 'EGLL'
        assert data['direction'] == 'W'
        assert data['takeoff_speeds']['V1'] >= 160
        assert data['dep_weather']['wind']['speed_kt'] == 15
        assert data['takeoff']['wind']['headwind_kt'] is not None
