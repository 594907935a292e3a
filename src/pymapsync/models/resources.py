"""Named map resources and the icons that render them.

Every icon/resource relationship is declared here once. Nothing in the
package derives a resource name from an icon name (or vice versa) by
string manipulation.
"""

from __future__ import annotations

from enum import StrEnum


class ResourceName(StrEnum):
    """Fixed names of the (source, layer) pairs the package manages."""

    VEHICLES = "vehicles"
    CHARGERS = "chargers"
    PICKUP = "pickup"
    DROPOFF = "dropoff"
    LOCATION = "location"
    ROUTE = "route"


class MapIcon(StrEnum):
    """Image ids registered on the surface."""

    DRONE = "drone"
    CHARGER = "charger"
    LOCATION = "location"
    PICKUP = "pickup"
    DROPOFF = "dropoff"


class ItemType(StrEnum):
    """Kinds of domain items callers push through ``update_map``."""

    VEHICLE = "vehicle"
    CHARGER = "charger"


#: Symbol resources and the icon each one draws.
RESOURCE_ICONS: dict[ResourceName, MapIcon] = {
    ResourceName.VEHICLES: MapIcon.DRONE,
    ResourceName.CHARGERS: MapIcon.CHARGER,
    ResourceName.PICKUP: MapIcon.PICKUP,
    ResourceName.DROPOFF: MapIcon.DROPOFF,
    ResourceName.LOCATION: MapIcon.LOCATION,
}

#: Asset file for each icon, relative to the configured icon base URL.
ICON_ASSETS: dict[MapIcon, str] = {
    MapIcon.DRONE: "icon_drone.png",
    MapIcon.CHARGER: "icon_charging_station.png",
    MapIcon.LOCATION: "icon_location.png",
    MapIcon.PICKUP: "pin-pickup.svg",
    MapIcon.DROPOFF: "pin-dropoff.svg",
}

ITEM_RESOURCES: dict[ItemType, ResourceName] = {
    ItemType.VEHICLE: ResourceName.VEHICLES,
    ItemType.CHARGER: ResourceName.CHARGERS,
}

#: Resources created as soon as the surface is ready, and clickable.
EAGER_RESOURCES: tuple[ResourceName, ...] = (ResourceName.VEHICLES, ResourceName.CHARGERS)

TERMINAL_RESOURCES: tuple[ResourceName, ResourceName] = (ResourceName.PICKUP, ResourceName.DROPOFF)
