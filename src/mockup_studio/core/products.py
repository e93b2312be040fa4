"""Product catalogue and selection vocabularies.

Defines the enumerations the user picks from (product, model type, subject,
sticker type, sticker placement) and the fixed groupings the prompt builder
and the UI branch on.

Product Categories
------------------
========================  ===============================================
Category                  Products
========================  ===============================================
``TRY_ON``                shoes, undergarments, sunglasses
``APPAREL``               t-shirt, pants, cap, bag mockup
``FLAT_SURFACE``          phone case, tablet ebook
``VEHICLE_STICKER``       car sticker, bike sticker
``THEMED``                fridge magnet, big bottle
========================  ===============================================

Try-on and apparel products are the products "with model selection": the
user can choose between an AI-generated human model and an uploaded photo.

Car Subtypes
------------
Car subjects encode a body style and a viewing angle in their value
(``"suv-back"`` is an SUV seen from the rear).  :func:`car_body_style` and
:func:`car_view_angle` decode them into the phrases used in instructions.
"""

from __future__ import annotations

from enum import Enum


class Product(str, Enum):
    """Products a design can be mocked up on.

    Member order is the display order of the product picker.
    """

    T_SHIRT = "t-shirt"
    PANTS = "pants"
    CAP = "cap"
    BAG_MOCKUP = "bag mockup"
    PHONE_CASE = "phone case"
    TABLET_EBOOK = "tablet ebook"
    CAR_STICKER = "car sticker"
    BIKE_STICKER = "bike sticker"
    FRIDGE_MAGNET = "fridge magnet"
    BIG_BOTTLE = "big bottle"
    SHOES = "shoes"
    UNDERGARMENTS = "undergarments"
    SUNGLASSES = "sunglasses"

    @property
    def label(self) -> str:
        """Title-cased display label (``"bag mockup"`` -> ``"Bag Mockup"``)."""
        return " ".join(word[:1].upper() + word[1:] for word in self.value.split(" "))


class Category(str, Enum):
    TRY_ON = "try-on"
    APPAREL = "apparel"
    FLAT_SURFACE = "flat-surface"
    VEHICLE_STICKER = "vehicle-sticker"
    THEMED = "themed"


class ModelType(str, Enum):
    AI = "ai"
    CUSTOM = "custom"


class Subject(str, Enum):
    """Model or vehicle context for AI-generated scenes."""

    HUMAN = "human"
    CAR = "car"
    BIKE = "bike"
    BUS = "bus"
    TRAIN = "train"
    SEDAN_SIDE = "sedan-side"
    SEDAN_BACK = "sedan-back"
    SUV_SIDE = "suv-side"
    SUV_BACK = "suv-back"
    HATCHBACK_SIDE = "hatchback-side"
    HATCHBACK_BACK = "hatchback-back"


class StickerType(str, Enum):
    STICKER = "sticker"
    WRAP = "wrap"


class StickerPlacement(str, Enum):
    BODY = "body"
    WINDOW = "window"


class Vehicle(str, Enum):
    """Vehicle family an instruction is written for."""

    CAR = "car"
    MOTORCYCLE = "motorcycle"
    BUS = "bus"
    TRAIN = "train"


PRODUCT_CATEGORIES: dict[Product, Category] = {
    Product.SHOES: Category.TRY_ON,
    Product.UNDERGARMENTS: Category.TRY_ON,
    Product.SUNGLASSES: Category.TRY_ON,
    Product.T_SHIRT: Category.APPAREL,
    Product.PANTS: Category.APPAREL,
    Product.CAP: Category.APPAREL,
    Product.BAG_MOCKUP: Category.APPAREL,
    Product.PHONE_CASE: Category.FLAT_SURFACE,
    Product.TABLET_EBOOK: Category.FLAT_SURFACE,
    Product.CAR_STICKER: Category.VEHICLE_STICKER,
    Product.BIKE_STICKER: Category.VEHICLE_STICKER,
    Product.FRIDGE_MAGNET: Category.THEMED,
    Product.BIG_BOTTLE: Category.THEMED,
}

CAR_SUBTYPE_LABELS: dict[Subject, str] = {
    Subject.SEDAN_SIDE: "Sedan (Side)",
    Subject.SEDAN_BACK: "Sedan (Back)",
    Subject.SUV_SIDE: "SUV (Side)",
    Subject.SUV_BACK: "SUV (Back)",
    Subject.HATCHBACK_SIDE: "Hatchback (Side)",
    Subject.HATCHBACK_BACK: "Hatchback (Back)",
}

CAR_SUBJECTS: tuple[Subject, ...] = tuple(CAR_SUBTYPE_LABELS)

VEHICLE_SUBJECTS: tuple[Subject, ...] = CAR_SUBJECTS + (Subject.BIKE, Subject.BUS, Subject.TRAIN)

STICKER_TYPE_LABELS: dict[StickerType, str] = {
    StickerType.STICKER: "Sticker",
    StickerType.WRAP: "Full Wrap",
}

PLACEMENT_LABELS: dict[StickerPlacement, str] = {
    StickerPlacement.BODY: "Body Panel",
    StickerPlacement.WINDOW: "Rear Window",
}

MODEL_TYPE_LABELS: dict[ModelType, str] = {
    ModelType.AI: "AI Generated",
    ModelType.CUSTOM: "Upload Your Own",
}


def category_of(product: Product) -> Category:
    return PRODUCT_CATEGORIES[product]


def is_try_on(product: Product | None) -> bool:
    return product is not None and category_of(product) is Category.TRY_ON


def is_apparel(product: Product | None) -> bool:
    return product is not None and category_of(product) is Category.APPAREL


def is_vehicle_sticker(product: Product | None) -> bool:
    return product is not None and category_of(product) is Category.VEHICLE_STICKER


def has_model_selection(product: Product | None) -> bool:
    """Return True for products worn or held by a human model."""
    return is_try_on(product) or is_apparel(product)


def default_subject(product: Product | None) -> Subject | None:
    """Subject preselected when *product* is picked.

    Args:
        product: Newly selected product, or ``None``.

    Returns:
        ``HUMAN`` for products with model selection, ``SEDAN_SIDE`` for car
        stickers, ``BIKE`` for bike stickers, otherwise ``None``.
    """
    if has_model_selection(product):
        return Subject.HUMAN
    if product is Product.CAR_STICKER:
        return Subject.SEDAN_SIDE
    if product is Product.BIKE_STICKER:
        return Subject.BIKE
    return None


def vehicle_for(subject: Subject | None) -> Vehicle:
    """Map a subject onto the vehicle family used by sticker instructions.

    Bus, train and bike map onto their own families; every other subject
    (car subtypes, the generic ``car``, or nothing at all) is a car.
    """
    if subject is Subject.BUS:
        return Vehicle.BUS
    if subject is Subject.TRAIN:
        return Vehicle.TRAIN
    if subject is Subject.BIKE:
        return Vehicle.MOTORCYCLE
    return Vehicle.CAR


def car_body_style(subject: Subject | None) -> str:
    """Return the body style phrase for a car subtype (default sedan)."""
    value = subject.value if subject is not None else ""
    if "sedan" in value:
        return "sedan car"
    if "suv" in value:
        return "SUV"
    if "hatchback" in value:
        return "hatchback car"
    return "sedan car"


def car_view_angle(subject: Subject | None) -> str:
    """Return the viewing angle phrase for a car subtype (default side)."""
    if subject is not None and "back" in subject.value:
        return "from the rear"
    return "from the side"
