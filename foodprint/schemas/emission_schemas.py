"""
Pydantic schemas for the order emission engine.
Defines the engine's value types and the request/response models of the API.
"""

from typing import Annotated, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Engine Value Types
# =============================================================================

class Coordinates(BaseModel):
    """A geographic point."""
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class OrderLine(BaseModel):
    """A single parsed clause of a dish string."""
    count: int = Field(..., gt=0, description="Number of servings ordered")
    dish_name: str = Field(..., min_length=1, description="Lower-cased dish name")


class TravelDetails(BaseModel):
    """Resolved delivery travel: distance plus the factor used to price it."""
    model_config = ConfigDict(populate_by_name=True)

    distance: float = Field(..., ge=0, description="Distance travelled in km")
    transport_type: Optional[str] = Field(default=None, alias="transportType")
    emission_factor: Optional[float] = Field(
        default=None, ge=0, alias="emissionFactor", description="kg CO2e per km"
    )


# =============================================================================
# Output Models
# =============================================================================

class DishBreakdown(BaseModel):
    """Emission detail for one order line."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    count: int
    emission: str = Field(..., description="kg CO2e per serving")
    total_emission: str = Field(..., alias="totalEmission", description="kg CO2e for all servings")
    ingredients: Dict[str, float] = Field(..., description="Grams per serving")


class IngredientBreakdown(BaseModel):
    """Aggregated contribution of one ingredient across the order."""
    amount: str = Field(..., description="Total grams")
    emission: str = Field(..., description="kg CO2e")
    percentage: str = Field(..., description="Share of food emission (0-100)")


class EmissionDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    dishes: List[DishBreakdown] = Field(default_factory=list)
    ingredients: Dict[str, IngredientBreakdown] = Field(default_factory=dict)
    dish_count: int = Field(default=0, alias="dishCount")
    packaging_type: Optional[str] = Field(default=None, alias="packagingType")


class EmissionResult(BaseModel):
    """Full footprint of an order, all values in kg CO2e formatted to 2 decimals."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "food": "4.60",
                "packaging": "1.25",
                "travel": "0.86",
                "travelDistance": "7.50",
                "transportType": "motorcycle",
                "total": "6.71",
                "details": {
                    "dishes": [
                        {
                            "name": "naan",
                            "count": 1,
                            "emission": "0.30",
                            "totalEmission": "0.30",
                            "ingredients": {"flour": 80, "yogurt": 20, "butter": 10}
                        }
                    ],
                    "ingredients": {
                        "flour": {"amount": "80.0", "emission": "0.13", "percentage": "43.0"}
                    },
                    "dishCount": 3,
                    "packagingType": "plastic"
                }
            }
        },
    )

    food: str
    packaging: str
    travel: str
    travel_distance: str = Field(..., alias="travelDistance")
    transport_type: str = Field(..., alias="transportType")
    total: str
    details: EmissionDetails


# =============================================================================
# Request Models
# =============================================================================

class EmissionCalculationRequest(BaseModel):
    """Request body for estimating the footprint of an order."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "dishes": "2 x butter chicken, 1 x naan",
                "packagingType": "plastic",
                "originAddress": "Connaught Place, New Delhi",
                "destination": {"lat": 28.5355, "lng": 77.3910},
                "transportType": "motorcycle"
            }
        },
    )

    dishes: str = Field(..., description="Dish string, e.g. '2 x butter chicken, 1 x naan'")
    travel: Optional[Union[Annotated[float, Field(ge=0)], TravelDetails]] = Field(
        default=None, description="Distance in km or a resolved travel object"
    )
    packaging_type: str = Field(default="plastic", alias="packagingType")
    origin_address: Optional[str] = Field(default=None, alias="originAddress")
    destination: Optional[Coordinates] = None
    transport_type: Optional[str] = Field(default=None, alias="transportType")

    @field_validator("packaging_type")
    @classmethod
    def validate_packaging_type(cls, v: str) -> str:
        """Normalize packaging type."""
        return v.strip().lower()


class TravelDistanceRequest(BaseModel):
    """Request body for resolving a delivery distance."""
    model_config = ConfigDict(populate_by_name=True)

    origin_address: Optional[str] = Field(default=None, alias="originAddress")
    destination: Optional[Coordinates] = None
    transport_type: Optional[str] = Field(default=None, alias="transportType")
