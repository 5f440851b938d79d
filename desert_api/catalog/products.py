"""
Desert Solutions product catalog

Climate-control equipment offered in quotations and datasheets. Prices are
list prices per currency; basePrice is the USD list price used when a
currency has no explicit entry.
"""

import logging
from typing import Literal, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CurrencyCode = Literal["USD", "EUR", "CNY"]


class ProductVariant(BaseModel):
    id: str
    name: str
    specifications: dict[str, str] = Field(default_factory=dict)
    basePrice: Optional[float] = None


class Product(BaseModel):
    id: str
    category: str
    name: str
    shortDescription: str
    longDescription: str = ""
    basePrice: float
    specifications: dict[str, str] = Field(default_factory=dict)
    images: list[str] = Field(default_factory=list)
    defaultWarranty: Optional[str] = None
    defaultLeadTime: Optional[str] = None
    variants: list[ProductVariant] = Field(default_factory=list)
    variantId: Optional[str] = None


_ACSC_400_SPECS = {
    "SKU": "DS-ACSC-400",
    "Cooling Capacity": "40 kW (136,500 BTU/h)",
    "Total Power Consumption": "14.8 kW",
    "Power Supply": "380-415V / 3Ph / 50Hz",
    "Refrigerant": "R410A (6.2 kg)",
    "Number of Compressors": "2",
    "Compressor Type": "Hermetic scroll compressors with soft start",
    "Temperature Control Range": "18°C - 32°C",
    "Max Ambient Temperature": "55°C",
    "Airflow": "9,500 m³/h",
    "Control System": "Microprocessor controller with Modbus RTU / BACnet interface",
    "Safety Protection": "High/low pressure switches, phase monitor, overload relays",
    "Dimensions (L×W×H)": "2200 × 1100 × 2350 mm",
    "Weight": "780 kg",
    "Noise Level": "68 dB(A) @ 1 m",
    "Ingress Protection": "IP54",
}

_ACSC_250_SPECS = {
    "SKU": "DS-ACSC-250",
    "Cooling Capacity": "25 kW (85,300 BTU/h)",
    "Total Power Consumption": "9.6 kW",
    "Power Supply": "380-415V / 3Ph / 50Hz",
    "Refrigerant": "R410A (4.1 kg)",
    "Number of Compressors": "1",
    "Compressor Type": "Hermetic scroll compressor with soft start",
    "Temperature Control Range": "18°C - 32°C",
    "Max Ambient Temperature": "55°C",
    "Airflow": "6,200 m³/h",
    "Control System": "Microprocessor controller with Modbus RTU interface",
    "Safety Protection": "High/low pressure switches, phase monitor",
    "Dimensions (L×W×H)": "1800 × 950 × 2100 mm",
    "Weight": "520 kg",
    "Noise Level": "65 dB(A) @ 1 m",
    "Ingress Protection": "IP54",
}

PRODUCTS: list[Product] = [
    Product(
        id="ds-acsc-400",
        category="container-cooling",
        name="Desert Solutions ACSC-400 Container Cooling Unit",
        shortDescription="40 kW packaged cooling unit for battery and data containers",
        longDescription=(
            "The ACSC-400 is a packaged, side-mounted cooling unit designed for energy storage "
            "and IT containers operating in extreme desert climates. Two independent refrigerant "
            "circuits provide N+1 redundancy within a single frame.\n"
            "Key Features:\n"
            "• Dual independent refrigerant circuits\n"
            "• Rated for continuous operation at 55°C ambient\n"
            "• Sand-trap louvres and washable G4 filters\n"
            "• Remote monitoring via Modbus RTU or BACnet\n"
            "• Corrosion-protected condenser coils"
        ),
        basePrice=18500.0,
        specifications=_ACSC_400_SPECS,
        images=["products/ds-acsc-400/front.jpg", "products/ds-acsc-400/side.jpg"],
        defaultWarranty="24 months from commissioning",
        defaultLeadTime="8-10 weeks",
        variants=[
            ProductVariant(
                id="ds-acsc-400-r407c",
                name="Desert Solutions ACSC-400 Container Cooling Unit (R407C)",
                specifications={
                    "SKU": "DS-ACSC-400-R407C",
                    "Refrigerant": "R407C (6.8 kg)",
                    "Total Power Consumption": "15.3 kW",
                },
                basePrice=18900.0,
            ),
            ProductVariant(
                id="ds-acsc-400-r290",
                name="Desert Solutions ACSC-400 Container Cooling Unit (R290)",
                specifications={
                    "SKU": "DS-ACSC-400-R290",
                    "Refrigerant": "R290 Propane (2.4 kg)",
                    "Total Power Consumption": "14.1 kW",
                    "Safety Protection": (
                        "ATEX-rated leak detection, high/low pressure switches, phase monitor"
                    ),
                },
                basePrice=19800.0,
            ),
        ],
    ),
    Product(
        id="ds-acsc-250",
        category="container-cooling",
        name="Desert Solutions ACSC-250 Container Cooling Unit",
        shortDescription="25 kW packaged cooling unit for compact containers",
        longDescription=(
            "The ACSC-250 brings the ACSC platform to 10 and 20 ft containers with a single "
            "circuit design and the same desert-rated components.\n"
            "Key Features:\n"
            "• Rated for continuous operation at 55°C ambient\n"
            "• Sand-trap louvres and washable G4 filters\n"
            "• Remote monitoring via Modbus RTU"
        ),
        basePrice=12900.0,
        specifications=_ACSC_250_SPECS,
        images=["products/ds-acsc-250/front.jpg"],
        defaultWarranty="24 months from commissioning",
        defaultLeadTime="6-8 weeks",
        variants=[
            ProductVariant(
                id="ds-acsc-250-r407c",
                name="Desert Solutions ACSC-250 Container Cooling Unit (R407C)",
                specifications={
                    "SKU": "DS-ACSC-250-R407C",
                    "Refrigerant": "R407C (4.5 kg)",
                },
                basePrice=13200.0,
            ),
        ],
    ),
    Product(
        id="ds-shelter-12",
        category="shelter-cooling",
        name="Desert Solutions SW-12 Shelter Wall-Mount Air Conditioner",
        shortDescription="12 kW wall-mount air conditioner for telecom shelters",
        longDescription=(
            "Wall-mounted air conditioner for telecom and utility shelters with integrated "
            "free-cooling damper to cut energy use during cooler nights."
        ),
        basePrice=5400.0,
        specifications={
            "SKU": "DS-SW-12",
            "Cooling Capacity": "12 kW (41,000 BTU/h)",
            "Total Power Consumption": "4.2 kW",
            "Power Supply": "220-240V / 1Ph / 50Hz",
            "Refrigerant": "R410A (2.2 kg)",
            "Number of Compressors": "1",
            "Compressor Type": "Rotary compressor",
            "Temperature Control Range": "20°C - 35°C",
            "Control System": "Lead/lag controller with dry contact alarms",
            "Safety Protection": "High/low pressure switches, anti-short-cycle timer",
            "Dimensions (L×W×H)": "1050 × 420 × 1900 mm",
            "Weight": "165 kg",
        },
        images=["products/ds-shelter-12/front.jpg"],
        defaultWarranty="18 months from delivery",
        defaultLeadTime="4-6 weeks",
    ),
    Product(
        id="ds-dehum-90",
        category="dehumidification",
        name="Desert Solutions DH-90 Industrial Dehumidifier",
        shortDescription="90 L/day refrigerant dehumidifier for coastal installations",
        longDescription="Industrial dehumidifier for coastal substations and storage rooms.",
        basePrice=3100.0,
        specifications={
            "SKU": "DS-DH-90",
            "Dehumidification Capacity": "90 L/day @ 30°C / 80% RH",
            "Total Power Consumption": "1.4 kW",
            "Power Supply": "220-240V / 1Ph / 50Hz",
            "Refrigerant": "R410A (0.9 kg)",
            "Control System": "Digital humidistat with remote on/off",
            "Dimensions (L×W×H)": "620 × 480 × 1050 mm",
            "Weight": "78 kg",
        },
        defaultWarranty="12 months from delivery",
        defaultLeadTime="2-3 weeks",
    ),
]

# List prices per currency, keyed by product or variant id
PRODUCT_PRICES: dict[str, dict[str, float]] = {
    "ds-acsc-400": {"USD": 18500.0, "EUR": 17200.0, "CNY": 132000.0},
    "ds-acsc-400-r407c": {"USD": 18900.0, "EUR": 17550.0, "CNY": 134800.0},
    "ds-acsc-400-r290": {"USD": 19800.0, "EUR": 18400.0, "CNY": 141200.0},
    "ds-acsc-250": {"USD": 12900.0, "EUR": 11990.0, "CNY": 92000.0},
    "ds-acsc-250-r407c": {"USD": 13200.0, "EUR": 12270.0},
    "ds-shelter-12": {"USD": 5400.0, "EUR": 5020.0, "CNY": 38500.0},
    "ds-dehum-90": {"USD": 3100.0},
}

_PRODUCTS_BY_ID = {product.id: product for product in PRODUCTS}
_VARIANT_PARENTS = {
    variant.id: product.id for product in PRODUCTS for variant in product.variants
}


def all_products() -> list[Product]:
    return list(PRODUCTS)


def get_products_by_category(category: str) -> list[Product]:
    return [product for product in PRODUCTS if product.category == category]


def get_product_with_variant(product_id: str, variant_id: Optional[str] = None) -> Optional[Product]:
    """
    Get a product with a variant's name, price and specifications applied.

    Returns None when the product or the requested variant doesn't exist.
    """
    product = _PRODUCTS_BY_ID.get(product_id)
    if not product:
        return None
    if not variant_id:
        return product

    variant = next((v for v in product.variants if v.id == variant_id), None)
    if not variant:
        logger.warning(f"Variant {variant_id} not found for product {product_id}")
        return None

    return product.model_copy(
        update={
            "name": variant.name,
            "basePrice": variant.basePrice if variant.basePrice is not None else product.basePrice,
            "specifications": {**product.specifications, **variant.specifications},
            "variantId": variant.id,
        }
    )


def get_product_by_id(product_id: str) -> Optional[Product]:
    """Look up a product; variant ids resolve to the variant-applied parent"""
    product = _PRODUCTS_BY_ID.get(product_id)
    if product:
        return product

    parent_id = _VARIANT_PARENTS.get(product_id)
    if parent_id:
        return get_product_with_variant(parent_id, product_id)
    return None


def get_product_price(pricing_id: str, currency: str) -> Optional[float]:
    """List price for a product or variant in a currency, None if not listed"""
    return PRODUCT_PRICES.get(pricing_id, {}).get(currency)
