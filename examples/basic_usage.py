#!/usr/bin/env python3
"""
Basic Usage Example - Treatment Plan Builder

This script walks through one editing session with the built-in dental
catalog. It shows how to:
- Open an editor for a new plan
- Search categories and toggle "show all"
- Add line items and edit their costs
- Hold the quantity stepper (driven by a virtual clock)
- Save the plan to stdout

Run: python examples/basic_usage.py
"""

from txplan_app.config.loader import ConfigLoader
from txplan_app.delivery.stdout_delivery import StdoutDeliveryConfig, StdoutPlanDelivery
from txplan_app.engine import TreatmentPlanEditor
from txplan_app.logging import configure_logging
from txplan_app.stepper.scheduler import ManualScheduler
from txplan_app.utils.currency import format_cost_breakdown, format_currency


def print_plan(editor: TreatmentPlanEditor) -> None:
    """Print the current line items and totals."""
    draft = editor.draft
    print(f"📋 {draft.name or '(unnamed plan)'} [{draft.status.label}] from {draft.start_date}")
    for index, item in enumerate(draft.line_items):
        print(
            f"  {index}. {item.category_name:<14} {format_cost_breakdown(item):<28} "
            f"= {format_currency(item.total_cost)}"
        )
    print(f"  Total: {format_currency(draft.total_cost)} "
          f"(materials {format_currency(draft.total_material_cost)})")
    print()


def main():
    """Run the demo session."""
    configure_logging(level="WARNING")

    print("🦷 Treatment Plan Builder - Basic Usage Demo")
    print("=" * 60)

    loader = ConfigLoader.create()
    config = loader.load_config()
    scheduler = ManualScheduler()

    editor = TreatmentPlanEditor(
        catalog=loader.load_catalog(),
        delivery=StdoutPlanDelivery(StdoutDeliveryConfig(format="pretty")),
        scheduler=scheduler,
        config=config
    )
    editor.draft.set_name("Lower left quadrant")

    print("1. Browsing categories...")
    view = editor.category_view()
    print(f"   Showing {len(view.categories)} of {view.total_available}: "
          f"{', '.join(c.name for c in view.categories)}")
    if view.offer_show_all:
        editor.toggle_show_all()
        print(f"   Show all → {len(editor.category_view().categories)} categories")
    print()

    print("2. Searching for 'tooth'...")
    editor.set_search_query("tooth")
    matches = editor.category_view().categories
    print(f"   Matches: {', '.join(c.name for c in matches)}")
    for category in matches[:2]:
        editor.add_category(category.id)
    editor.clear_search()
    print()

    print("3. Editing line items...")
    editor.update_line(0, "materialCost", 350)
    editor.update_line(0, "particulars", "Composite filling, tooth #36")
    print_plan(editor)

    print("4. Holding '+' on the extraction line for 1.1 seconds...")
    editor.press_quantity(1, "up")
    scheduler.advance(1100)
    editor.release_quantity(1)
    print_plan(editor)

    print("5. Saving...")
    result = editor.save()
    print(f"   Delivery: {result.status.value} ({result.message})")


if __name__ == "__main__":
    main()
