"""
Command line front end.

    concorde-efb plan EGLL KJFK --route "CPT 50.0,-20.0" --fl 580
    concorde-efb plan --ofp simbrief.json
    concorde-efb metar EGLL KJFK
    concorde-efb decode-metar "EGLL 211250Z 24012KT 9999 BKN030 15/09 Q1018"
"""

import sys
import json
import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import DEFAULT_FUEL_POLICY, PlannerSettings, get_log_level
from .exceptions import PlannerError
from .ofp.normalizer import extract_ofp
from .planning.planner import FlightPlanner, PlanRequest
from .sources.metar import MetarSource
from .sources.ourairports import OurAirportsSource
from .sources.simbrief import SimBriefSource
from .weather.metar import decode_metar

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = "~/.cache/concorde_efb"


class PlanCommand:
    """Build a plan request from arguments and print the resulting plan."""

    def __init__(self, args, settings: PlannerSettings):
        self.args = args
        self.settings = settings

    def _reference(self):
        source = OurAirportsSource(
            self.args.cache_dir or self.settings.cache_dir or DEFAULT_CACHE_DIR,
            timeout=self.settings.http_timeout,
        )
        if self.args.force_refresh:
            source.set_force_refresh()
        if self.args.never_refresh:
            source.set_never_refresh()
        return source.get_reference()

    def _request(self) -> PlanRequest:
        args = self.args
        policy = replace(
            DEFAULT_FUEL_POLICY,
            **{k: v for k, v in (
                ('taxi_kg', args.taxi),
                ('contingency_pct', args.contingency),
                ('final_reserve_kg', args.final_reserve),
                ('trim_tank_kg', args.trim),
            ) if v is not None}
        )

        request = None
        if args.ofp:
            extract = extract_ofp(Path(args.ofp).read_text())
            request = PlanRequest.from_ofp(extract, fuel_policy=policy)
        elif args.simbrief_user:
            extract = SimBriefSource(timeout=self.settings.http_timeout).fetch_extract(username=args.simbrief_user)
            request = PlanRequest.from_ofp(extract, fuel_policy=policy)

        if request is None:
            if not args.dep or not args.arr:
                raise PlannerError("Departure and arrival are required without --ofp or --simbrief-user")
            request = PlanRequest(dep_icao=args.dep, arr_icao=args.arr, fuel_policy=policy)

        # Explicit arguments override the imported OFP
        overrides = {
            'dep_icao': args.dep,
            'arr_icao': args.arr,
            'route': args.route,
            'distance_nm': args.distance,
            'cruise_fl': args.fl,
            'alternate_icao': args.alternate,
            'dep_runway': args.dep_runway,
            'arr_runway': args.arr_runway,
            'pax_count': args.pax,
        }
        for name, value in overrides.items():
            if value is not None:
                setattr(request, name, value)
        # A route given without a distance replaces the OFP distance
        if args.route and args.distance is None:
            request.distance_nm = None

        if args.fetch_metar:
            metars = MetarSource(timeout=self.settings.http_timeout).fetch_many([request.dep_icao, request.arr_icao])
            dep = metars.get(request.dep_icao.upper())
            arr = metars.get(request.arr_icao.upper())
            if dep is not None and dep.ok:
                request.dep_metar = dep.raw
            if arr is not None and arr.ok:
                request.arr_metar = arr.raw
        return request

    def run(self) -> dict:
        request = self._request()
        planner = FlightPlanner(self._reference(), self.settings)
        plan = planner.plan(request)
        for warning in plan.warnings:
            logger.warning(warning)
        return plan.to_dict()


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, default=str))


def run_plan(args, settings: PlannerSettings) -> int:
    _print_json(PlanCommand(args, settings).run())
    return 0


def run_metar(args, settings: PlannerSettings) -> int:
    results = MetarSource(timeout=settings.http_timeout).fetch_many(args.airports)
    output = []
    failed = 0
    for icao, result in results.items():
        entry = result.to_dict()
        if result.ok:
            entry['decoded'] = decode_metar(result.raw).to_dict()
        else:
            failed += 1
            logger.error(result.error)
        output.append(entry)
    _print_json(output)
    return 1 if failed == len(results) and results else 0


def run_decode_metar(args, settings: PlannerSettings) -> int:
    _print_json(decode_metar(" ".join(args.raw)).to_dict())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='concorde-efb', description='Concorde flight planning calculator')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', help='Verbose output', action='store_true')
    subparsers = parser.add_subparsers(dest='command', required=True)

    plan = subparsers.add_parser('plan', help='Plan a flight and print it as JSON')
    plan.add_argument('dep', help='Departure ICAO', nargs='?')
    plan.add_argument('arr', help='Arrival ICAO', nargs='?')
    plan.add_argument('--route', help='Route string')
    plan.add_argument('--distance', help='Planned distance in NM (overrides the route)', type=float)
    plan.add_argument('--fl', help='Cruise flight level (recommended when omitted)', type=float)
    plan.add_argument('--alternate', help='Alternate ICAO')
    plan.add_argument('--dep-runway', help='Departure runway (longest when omitted)')
    plan.add_argument('--arr-runway', help='Arrival runway (longest when omitted)')
    plan.add_argument('--pax', help='Passenger count', type=int)
    plan.add_argument('--taxi', help='Taxi fuel in kg', type=float)
    plan.add_argument('--contingency', help='Contingency fuel in percent of trip', type=float)
    plan.add_argument('--final-reserve', help='Final reserve fuel in kg', type=float)
    plan.add_argument('--trim', help='Trim tank fuel in kg', type=float)
    plan.add_argument('--ofp', help='OFP JSON file to import')
    plan.add_argument('--simbrief-user', help='Import the latest OFP of a SimBrief user')
    plan.add_argument('--fetch-metar', help='Fetch live METARs for departure and arrival', action='store_true')
    plan.add_argument('-c', '--cache-dir', help='Directory to cache reference data')
    plan.add_argument('--force-refresh', help='Force refresh of cached data', action='store_true')
    plan.add_argument('--never-refresh', help='Never refresh cached data if it exists', action='store_true')
    plan.set_defaults(func=run_plan)

    metar = subparsers.add_parser('metar', help='Fetch and decode live METARs')
    metar.add_argument('airports', help='ICAO airport codes', nargs='+')
    metar.set_defaults(func=run_metar)

    decode = subparsers.add_parser('decode-metar', help='Decode a raw METAR')
    decode.add_argument('raw', help='Raw METAR text', nargs='+')
    decode.set_defaults(func=run_decode_metar)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=get_log_level(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    settings = PlannerSettings.from_env()
    try:
        return args.func(args, settings)
    except PlannerError as e:
        logger.error(str(e))
        return 2
    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        return 2


if __name__ == '__main__':
    sys.exit(main())
