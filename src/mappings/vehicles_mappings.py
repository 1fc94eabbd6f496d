"""
Vehicle column synonyms for dealer stock sheets.

Each canonical field maps to the lowercase header variants seen in dealer
exports. Add more synonyms as you encounter different dealer formats.
"""

COLUMN_SYNONYMS = {
    # Grouping fields
    "make": ("make", "brand", "manufacturer", "oem", "car make", "vehicle make"),
    "model": ("model", "model name", "car model", "vehicle model"),
    "year": (
        "year", "model year", "manufacturing year", "mfg year", "yr",
        "production year", "year of production",
    ),
    "color": (
        "color", "colour", "exterior color", "body color", "ext color",
        "paint color", "ext.color", "exterior colour",
    ),

    # Listing fields - more specific fields first
    "drivetrain": (
        "drivetrain", "drive type", "wheel drive", "driven wheels",
        "4wd", "2wd", "awd", "fwd", "rwd",
    ),
    "engine_size": (
        "engine size", "engine", "displacement", "cc", "engine capacity",
        "engine cc", "liters", "litres",
    ),
    "fuel_type": ("fuel type", "fuel", "power type", "propulsion", "petrol", "diesel", "gasoline"),
    "body_type": ("body type", "body style", "vehicle type", "car type", "sedan", "suv", "hatchback"),
    "variant": ("variant", "trim", "trim level", "version", "grade", "spec level", "edition", "series"),
    "transmission": ("transmission", "gearbox", "trans", "gear type", "transmission type"),
    "cylinders": ("cylinders", "cyl", "no of cylinders", "cylinder count", "cyls"),
    "horsepower": ("horsepower", "hp", "bhp", "horse power", "ps", "kw"),
    "seating_capacity": (
        "seating capacity", "seats", "seating", "passengers", "no of seats", "seat count",
    ),
    "doors": ("doors", "number of doors", "no of doors", "door count"),
    "condition": (
        "condition", "vehicle condition", "state", "car condition", "test level",
        "level", "grade", "rating",
    ),
    "regional_specs": (
        "regional specs", "specs", "specification", "region", "market",
        "emission standard", "brand type",
    ),
    "city": ("city", "location", "dealer city"),
    "country": ("country", "nation", "dealer country"),
    "description": (
        "description", "details", "about", "notes", "remarks", "comments",
        "vehicle condition description", "material name",
    ),

    # Vehicle-specific fields
    "vin": (
        "vin", "vehicle identification number", "chassis number", "chassis",
        "vin number", "chassis no", "vehicle chassis number",
    ),
    "registration_number": (
        "registration number", "reg number", "registration", "plate number",
        "license plate", "number plate", "reg no", "plate",
        "1st registration", "1st registration date", "first registration",
        "first registration date", "registration date",
    ),
    "mileage": (
        "mileage", "kms driven", "kilometers", "odometer", "odometer reading",
        "km", "miles", "kms", "distance", "run", "mileage displayed",
        "milage", "milage（km)", "mileage (km)", "mileage(km)",
    ),
    "owners": (
        "owners", "no of owners", "number of owners", "previous owners",
        "owner count", "ownership",
    ),
    "warranty": ("warranty", "warranty period", "warranty status", "warranty remaining"),
    "price": (
        "price", "asking price", "cost", "amount", "selling price", "rate",
        "value", "cif cost", "exw", "cif", "fob", "cif cost (jebel ali)",
        "fob cost", "unit price",
    ),
    "incoterm": ("incoterm", "incoterms", "trade term", "trade terms", "delivery terms"),
    "inspection_report_link": (
        "test report", "inspection report", "inspection", "report",
        "report url", "inspection url", "inspection link",
    ),
}

# Serial/index columns that carry no vehicle data
SKIP_PATTERNS = (
    "no", "sr. no", "sr no", "sr.no", "serial", "serial number", "serial no",
    "row", "#", "id", "index", "sno", "s.no",
)

# Repeating feature columns ("Feature 1", "Option 2", "Equipment")
FEATURE_COLUMN_PATTERNS = (
    r"^feature\s*\d*$",
    r"^option\s*\d*$",
    r"^equipment\s*\d*$",
)

# Column names that often contain combined Make+Model data
COMBINED_COLUMN_HINTS = ("model", "vehicle", "car", "name", "车型", "vehicle info", "model name")

# Color names expected in the samples of a column suggested as color
SAMPLE_COLOR_NAMES = ("white", "black", "silver", "gray", "grey", "red", "blue", "green")
