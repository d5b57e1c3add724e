"""Property definitions for the mirrored vehicle.

Three namespaces are created under the bridge prefix:

* ``control.*``: write-only triggers (buttons)
* ``vehicleStatus.*``: status mirrors; the two charge limits are the only
  writable status properties
* ``vehicleLocation.*`` / ``odometer.*``: read-only mirrors
"""

from __future__ import annotations

from pybluelink.state.store import PropertyDefinition, PropertyStore, PropertyType


def _button(name: str) -> PropertyDefinition:
    return PropertyDefinition(name=name, type=PropertyType.BOOLEAN, role="button", read=True, write=True)


def _indicator(name: str, type_: PropertyType, *, write: bool = False) -> PropertyDefinition:
    return PropertyDefinition(name=name, type=type_, role="indicator", read=True, write=write)


_BOOL = PropertyType.BOOLEAN
_NUM = PropertyType.NUMBER

CONTROL_PROPERTIES: dict[str, PropertyDefinition] = {
    "control.charge": _button("Start charging"),
    "control.charge_stop": _button("Stop charging"),
    "control.lock": _button("Lock the vehicle"),
    "control.unlock": _button("Unlock the vehicle"),
    "control.start": _button("Start climate for the vehicle"),
    "control.stop": _button("Stop climate for the vehicle"),
    "control.force_refresh": _button("Force refresh vehicle status"),
}

STATUS_PROPERTIES: dict[str, PropertyDefinition] = {
    "vehicleStatus.doorLock": _indicator("Vehicle doors locked", _BOOL),
    "vehicleStatus.trunkOpen": _indicator("Trunk open", _BOOL),
    "vehicleStatus.hoodOpen": _indicator("Hood open", _BOOL),
    "vehicleStatus.airCtrlOn": _indicator("Vehicle air control", _BOOL),
    "vehicleStatus.dte": _indicator("Vehicle total available range", _NUM),
    "vehicleStatus.evModeRange": _indicator("Vehicle total available range for ev", _NUM),
    "vehicleStatus.gasModeRange": _indicator("Vehicle total available range for gas", _NUM),
    "vehicleStatus.battery.charge_limit_slow": _indicator("Vehicle charge limit for slow charging", _NUM, write=True),
    "vehicleStatus.battery.charge_limit_fast": _indicator("Vehicle charge limit for fast charging", _NUM, write=True),
    "vehicleStatus.battery.minutes_to_charged": _indicator("Vehicle minutes to charged", _NUM),
    "vehicleStatus.battery.soc": _indicator("Vehicle battery state of charge", _NUM),
    "vehicleStatus.battery.charge": _indicator("Vehicle charging", _BOOL),
    "vehicleStatus.battery.plugin": _indicator(
        "Charger connected (UNPLUGGED = 0, FAST = 1, PORTABLE = 2, STATION = 3)",
        _NUM,
    ),
    "vehicleStatus.battery.soc-12V": _indicator("Vehicle 12v battery state of charge", _NUM),
    "vehicleStatus.battery.state-12V": _indicator("Vehicle 12v battery state", _NUM),
    "vehicleLocation.lat": _indicator("Vehicle position latitude", _NUM),
    "vehicleLocation.lon": _indicator("Vehicle position longitude", _NUM),
    "vehicleLocation.speed": _indicator("Vehicle speed", _NUM),
    "odometer.value": _indicator("Odometer value", _NUM),
    "odometer.unit": _indicator("Odometer unit", _NUM),
}


async def ensure_properties(store: PropertyStore) -> None:
    """Create every property if absent and subscribe the writable ones."""
    for table in (CONTROL_PROPERTIES, STATUS_PROPERTIES):
        for key, definition in table.items():
            await store.ensure_property(key, definition)
            if definition.write:
                store.subscribe(key)
