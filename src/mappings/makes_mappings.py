"""
Known vehicle makes, aliases and parent companies used by the smart splitter.
"""

KNOWN_MAKES = (
    # German
    "Volkswagen", "VW", "Audi", "BMW", "Mercedes", "Mercedes-Benz", "Porsche", "Opel",
    # Japanese
    "Toyota", "Honda", "Nissan", "Mazda", "Subaru", "Mitsubishi", "Suzuki", "Lexus",
    "Infiniti", "Acura", "Daihatsu", "Isuzu",
    # Korean
    "Hyundai", "Kia", "Genesis",
    # American
    "Ford", "Chevrolet", "Chevy", "GMC", "Dodge", "Jeep", "Chrysler", "Cadillac",
    "Lincoln", "Buick", "Tesla",
    # European
    "Volvo", "Peugeot", "Renault", "Citroen", "Fiat", "Alfa Romeo", "Seat", "Skoda", "Saab",
    # British
    "Land Rover", "Range Rover", "Jaguar", "Mini", "Bentley", "Rolls-Royce",
    "Aston Martin", "McLaren",
    # Italian
    "Ferrari", "Lamborghini", "Maserati",
    # Chinese
    "BYD", "Geely", "Great Wall", "Haval", "Chery", "SAIC", "NIO", "XPeng", "Li Auto",
    "Dongfeng", "FAW", "Changan", "GAC", "BAIC", "JAC", "Zotye", "Foton", "Wuling",
    "Baojun", "Roewe", "MG", "Lynk & Co", "Trumpchi", "GAC Trumpchi", "Maxus",
    "SAIC Maxus", "Hongqi", "Arcfox", "Zeekr", "Leapmotor", "IM Motors", "Rising Auto",
    "Voyah", "Denza", "Yangwang", "Fangchengbao", "Jiyue",
    # Other
    "Tata", "Mahindra", "Proton", "Perodua",
)

# Keys are matched case-insensitively
MAKE_ALIASES = {
    "vw": "Volkswagen",
    "chevy": "Chevrolet",
    "mercedes-benz": "Mercedes",
    "range rover": "Land Rover",
    "gac trumpchi": "Trumpchi",
    "saic maxus": "Maxus",
}

# Applied after first-letter capitalization
ACRONYM_FIXUPS = {
    "Vw": "Volkswagen",
    "Bmw": "BMW",
    "Gac": "GAC",
    "Byd": "BYD",
}

# Chinese joint venture parent company names ("GAC Honda", "Dongfeng Nissan")
PARENT_COMPANIES = (
    "GAC", "SAIC", "FAW", "Dongfeng", "BAIC", "Changan", "Brilliance", "Beijing",
    "Guangzhou", "Shanghai", "Geely", "Great Wall", "Chery", "BYD",
)

# Color names recognized inside free-text descriptions, in priority order
DESCRIPTION_COLORS = (
    "Black", "White", "Silver", "Gray", "Grey", "Red", "Blue", "Green", "Yellow",
    "Orange", "Brown", "Beige", "Gold", "Pearl White", "Metallic", "Sky Blue",
    "Manganese Black", "Starry Gold", "Rose Gold", "Mountain Green", "Pearl",
)
