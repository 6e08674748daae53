#!/usr/bin/env python3
"""Distance conversion demo.

Wires two input nodes to both sides of a miles/km converter and shows how a
single write ripples through the whole system:

- Writing miles recomputes km, and everything wired to km follows
- Writing km recomputes miles, and everything wired to miles follows
- Unparsable text poisons both sides of the converter

No external services required - runs entirely locally.
"""

from nodewire import NodeSystem, configure_logging, create_connector, create_input_node
from nodewire.models import create_distance_converter_node


def show(system: NodeSystem, label: str) -> None:
    print(f"\n{label}")
    print("-" * 70)
    for node_id, values in system.snapshot().items():
        name = system.get_node(node_id).name
        rendered = ", ".join(f"{prop}={value}" for prop, value in values.items())
        print(f"  {name:<12} {rendered}")


def main() -> None:
    configure_logging(level="WARNING", format="text")

    print("=" * 70)
    print("Nodewire Distance Conversion Demo")
    print("=" * 70)

    system = NodeSystem()
    miles_in = create_connector(system.add(create_input_node(name="miles", value="10")), "value")
    km_in = create_connector(system.add(create_input_node(name="km", value="10")), "value")
    conv_id = system.add(create_distance_converter_node(name="converter"))
    conv_miles = create_connector(conv_id, "miles")
    conv_km = create_connector(conv_id, "km")

    show(system, "1. FRESH SYSTEM (converter starts invalid)")

    system.connect(to_connector=miles_in, from_connector=conv_miles)
    system.connect(to_connector=conv_km, from_connector=km_in)
    show(system, "2. AFTER CONNECTING (converter adopts miles, km input adopts converter)")

    result = system.update(km_in, "42.195")
    show(system, "3. MARATHON WRITTEN INTO KM INPUT")
    print(
        f"\n  {result.endpoints_updated} setters called, "
        f"{result.ripples} ripple(s), depth {result.max_depth}"
    )

    system.update(miles_in, "far")
    show(system, "4. UNPARSABLE TEXT WRITTEN INTO MILES INPUT")

    print("\n" + "=" * 70)
    print("Demo complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()
