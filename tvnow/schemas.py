from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


BS_AREA_ID = 0
CS_AREA_ID = 255


class NetworkKind(str, Enum):
    """Broadcast network, valued by its path segment on the provider site"""
    TERRESTRIAL = "td"
    BS = "bs"
    CS = "cs"


class ViewMode(str, Enum):
    """Which guide view to render"""
    SNAPSHOT = "current"
    FULL_DAY = "today"
    WEEKLY = "week"


class ChannelColor(str, Enum):
    """ANSI SGR codes used to tag channel names"""
    BRIGHT_YELLOW = "93"
    BRIGHT_CYAN = "96"


class NetworkVariant(BaseModel):
    """Terrestrial region or satellite network to show the guide for"""
    model_config = ConfigDict(frozen=True)

    kind: NetworkKind = Field(..., description="Terrestrial, BS or CS")
    region_id: int | None = Field(None, description="Terrestrial region id (ggm_group_id)")

    @model_validator(mode="after")
    def validate_region(self):
        """Terrestrial needs a region id outside the satellite sentinels; satellites take none"""
        if self.kind is NetworkKind.TERRESTRIAL:
            if self.region_id is None:
                raise ValueError("Terrestrial variant requires a region_id")
            if not BS_AREA_ID < self.region_id < CS_AREA_ID:
                raise ValueError(
                    f"region_id must be between {BS_AREA_ID + 1} and {CS_AREA_ID - 1}, got {self.region_id}"
                )
        elif self.region_id is not None:
            raise ValueError(f"{self.kind.name} variant takes no region_id")
        return self

    @classmethod
    def from_area_id(cls, area_id: int) -> "NetworkVariant":
        """Map a numeric area id to its variant; 0 and 255 are the satellite sentinels."""
        if area_id == BS_AREA_ID:
            return cls(kind=NetworkKind.BS)
        if area_id == CS_AREA_ID:
            return cls(kind=NetworkKind.CS)
        return cls(kind=NetworkKind.TERRESTRIAL, region_id=area_id)

    @property
    def color(self) -> ChannelColor:
        if self.kind is NetworkKind.TERRESTRIAL:
            return ChannelColor.BRIGHT_YELLOW
        return ChannelColor.BRIGHT_CYAN

    def url(self, base_url: str, broadcast_date: str | None = None) -> str:
        """
        Build the schedule page URL for this variant

        Args:
            base_url: Provider root, e.g. 'https://bangumi.org'
            broadcast_date: YYYYMMDD for a single day of the week view, None for today's page

        Returns:
            Absolute URL of the schedule page
        """
        page = f"{base_url.rstrip('/')}/epg/{self.kind.value}"
        params = []
        if broadcast_date is not None:
            params.append(f"broad_cast_date={broadcast_date}")
        if self.kind is NetworkKind.TERRESTRIAL:
            params.append(f"ggm_group_id={self.region_id}")
        if not params:
            return page
        return f"{page}?{'&'.join(params)}"


class GuideRequest(BaseModel):
    """Resolved configuration for one invocation"""
    model_config = ConfigDict(frozen=True)

    variant: NetworkVariant
    mode: ViewMode = ViewMode.SNAPSHOT
