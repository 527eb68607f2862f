#!/usr/bin/env python3
"""
Interactive local booking wizard harness (no HTTP, no rental backend).

Usage:
  python3 scripts/wizard_local.py

What it does:
- Opens a wizard for two sample cars against the in-memory MockRentalBackend
- Sends your commands through the same WizardUseCase the API uses
- Prints the step, per-car costs, conflicts and any validation message
"""

from __future__ import annotations

import sys
from datetime import date, timedelta
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from carbooking.application.dto.backend_records import parse_car
from carbooking.application.exceptions import WizardError
from carbooking.application.use_cases.availability import effective_trip
from carbooking.application.use_cases.summary import summarize
from carbooking.application.use_cases.wizard import WizardResult, WizardUseCase
from carbooking.domain.entities.availability import UnavailablePeriod
from carbooking.domain.entities.wizard_state import WizardState
from carbooking.infrastructure.backend.mock_backend import MockRentalBackend
from carbooking.infrastructure.store.memory_store import MemoryWizardStore

SAMPLE_CARS = [
    {"car_id": 11, "make": "Toyota", "model": "Vios", "rent_price": 1000, "year": 2022, "no_of_seat": 5},
    {"car_id": 12, "make": "Mitsubishi", "model": "Montero", "rent_price": 1500, "year": 2021, "no_of_seat": 7},
]

HELP = """Commands:
  /common <field> <value>   set a common trip field (step 1)
  /car <n> <field> <value>  set a field on car n (step 2), e.g. /car 1 selected_driver 2
  /toggle <n>               switch car n between common and its own details
  /remove <n>               remove car n
  /next, /back              move between steps
  /terms, /accept           open the terms, then tick the checkbox
  /submit                   submit the bulk booking
  /show                     print the current state
  /quit"""


def _print_state(state: WizardState) -> None:
    summary = summarize(state)
    print(f"\nstep: {state.step.value} ({state.step.position + 1}/4)")
    for index, (draft, cost) in enumerate(zip(state.drafts, summary.car_costs)):
        trip = effective_trip(draft, state.common)
        mode = "common" if draft.use_common_data else "own"
        drive = "self-drive" if trip.is_self_drive else f"driver={draft.selected_driver}"
        print(
            f"  car {index + 1}: {draft.car.display_name} [{mode}] "
            f"{trip.start_date} -> {trip.end_date} {drive} cost={cost:,.2f}"
        )
    print(f"  total: {summary.total_cost:,.2f}")
    for conflict in summary.conflicts:
        print(f"  conflict: car {conflict.car_index + 1}: {conflict.message}")
    for notice in (summary.driver_warning, summary.availability_warning, state.warning):
        if notice:
            print(f"  warning: {notice}")
    if state.error:
        print(f"  error: {state.error}")


def _print_result(result: WizardResult) -> None:
    print(f"action: {result.action}")
    if result.message:
        print(f"message: {result.message}")
    if result.response:
        print(f"response: {result.response}")
    if result.state:
        _print_state(result.state)


def main() -> None:
    upcoming = date.today() + timedelta(days=14)
    backend = MockRentalBackend(
        periods={
            11: [UnavailablePeriod(upcoming, upcoming + timedelta(days=3), "Booked by another customer")],
            12: [UnavailablePeriod(upcoming + timedelta(days=7), upcoming + timedelta(days=7), "maintenance")],
        }
    )
    use_case = WizardUseCase(backend=backend, store=MemoryWizardStore())
    result = use_case.open([parse_car(car) for car in SAMPLE_CARS])
    session_id = result.state.session_id

    print("\nLocal Booking Wizard")
    print("-" * 60)
    print(HELP)
    _print_result(result)

    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return
        if not line:
            continue

        parts = line.split(maxsplit=3)
        cmd = parts[0].lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print(HELP)
            continue

        try:
            if cmd == "/common" and len(parts) >= 3:
                result = use_case.set_common_field(session_id, parts[1], line.split(maxsplit=2)[2])
            elif cmd == "/car" and len(parts) == 4:
                result = use_case.set_car_field(session_id, int(parts[1]) - 1, parts[2], parts[3])
            elif cmd == "/toggle" and len(parts) == 2:
                result = use_case.toggle_use_common_data(session_id, int(parts[1]) - 1)
            elif cmd == "/remove" and len(parts) == 2:
                result = use_case.remove_car(session_id, int(parts[1]) - 1)
            elif cmd == "/next":
                result = use_case.next_step(session_id)
            elif cmd == "/back":
                result = use_case.back(session_id)
            elif cmd == "/terms":
                result = use_case.view_terms(session_id)
            elif cmd == "/accept":
                result = use_case.set_terms_accepted(session_id, True)
            elif cmd == "/submit":
                result = use_case.submit(session_id)
            elif cmd == "/show":
                _print_state(use_case.get(session_id))
                continue
            else:
                print("Unknown command. Type /help.")
                continue
        except (WizardError, ValueError) as e:
            print(f"ERROR: {e}")
            continue

        _print_result(result)
        if result.state is None:
            print("Wizard closed.")
            return


if __name__ == "__main__":
    main()
