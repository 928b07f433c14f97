"""Static catalog of style presets."""

from dataclasses import dataclass

from progen_studio.domain.presets import Preset, PresetCategory

RENOVATION_PRESETS = (
    Preset(
        id="reno_office_dusk",
        label_en="Modern Office Dusk",
        label_th="ออฟฟิศโมเดิร์นค่ำ",
        template=(
            "RENOVATION: High-resolution architectural photography, straight "
            "frontal view of a modern 3-4 story office building. The facade "
            "design combines dark gray metal panels and rhythmic vertical fins "
            "with large floor-to-ceiling glass walls reflecting the sky. The main "
            "ground floor entrance is a deep recessed niche, clearly clad in "
            "contrasting materials like large cream stone slabs and warm brown "
            "wooden slats to create a focal point and welcoming feel. Atmosphere "
            "is dusk/twilight. Warm orange light glows from inside every floor, "
            "revealing interior details like desks and ceiling lights. The "
            "foreground is a wide plaza paved with granite or polished concrete. "
            "Only 1-2 large geometric concrete planters are placed at the "
            "entrance corners with low trimmed shrubs. No large gardens or trees "
            "blocking the building. Sky transitions from deep blue to orange at "
            "the horizon. Emphasis on sharp textures of metal, glass, wood, and "
            "stone. Photorealistic 8k."
        ),
    ),
    Preset(
        id="reno_luxury_commercial",
        label_en="Luxury Commercial",
        label_th="อาคารพาณิชย์หรู",
        template=(
            "RENOVATION: Transform this building into a frontal architectural "
            "photograph of a 2-story modern luxury commercial building. Facade "
            "design uses cream-colored stone or washed sand texture with a "
            "refined brick-like pattern. Key feature: three large vertical "
            "recessed panels with repetitive 3D geometric patterns or slats, "
            "illuminated by hidden warm white LED uplights to create beautiful "
            "light and shadow effects. Ground floor has full-height clear glass "
            "storefronts showing luxurious interior and warm lighting. Clean "
            "smooth stone plaza in front, no trees blocking the view. Somber "
            "evening sky, premium atmosphere, photorealistic 8k."
        ),
    ),
)

LANDSCAPE_SCENES = (
    Preset(
        id="land_tropical_resort",
        label_en="Tropical Resort",
        label_th="รีสอร์ททรอปิคอล",
        template=(
            "LANDSCAPE: Wide angle shot of a luxurious tropical resort pool area "
            "at sunset. Palm trees, wooden decking, crystal clear water with "
            "reflections. Warm ambient lighting. High end architectural "
            "visualization style."
        ),
    ),
    Preset(
        id="land_urban_park",
        label_en="Urban Park",
        label_th="สวนสาธารณะในเมือง",
        template=(
            "LANDSCAPE: Aerial view of a modern urban park with parametric "
            "concrete benches, lush green lawns, and contemporary pathway "
            "lighting. City skyline in the background during golden hour."
        ),
    ),
)


@dataclass
class PresetCatalog:
    """Lookup over an immutable set of preset categories."""

    _categories: tuple[PresetCategory, ...]
    _by_id: dict[str, Preset]

    def __init__(self, categories: list[PresetCategory]) -> None:
        self._categories = tuple(categories)
        self._by_id = {}
        for category in self._categories:
            for preset in category.presets:
                if preset.id in self._by_id:
                    raise ValueError(f"Duplicate preset id: {preset.id}")
                self._by_id[preset.id] = preset

    def lookup(self, preset_id: str) -> Preset | None:
        """Return the preset for an id, if present."""
        return self._by_id.get(preset_id)

    def categories(self) -> list[PresetCategory]:
        """Return all categories in display order."""
        return list(self._categories)

    def presets(self) -> list[Preset]:
        """Return all presets in display order."""
        return [preset for category in self._categories for preset in category.presets]


def default_catalog() -> PresetCatalog:
    """Build the built-in preset catalog."""
    return PresetCatalog(
        [
            PresetCategory(
                id="renovation",
                label="Architecture & Renovation",
                presets=RENOVATION_PRESETS,
            ),
            PresetCategory(
                id="landscape",
                label="Landscape & Environment",
                presets=LANDSCAPE_SCENES,
            ),
        ]
    )
