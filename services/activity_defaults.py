"""
Activity clothing tables.

Plain data only: per-activity clothing categories and their options, default
clothing for each temperature band, weather-modifier overrides and lighting
slots. services.activity_registry turns these into typed ActivityProfiles.

Temperature bands (T_comfort, °F):
- extremeCold: < 5
- freezing: 5-14
- veryCold: 15-24
- cold: 25-39
- cool: 40-54
- mild: 55-64
- warm: 65-74
- hot: >= 75
"""

# (key, label, default, options). Order is display order.
CATEGORY_TABLE = {
    "running": [
        ("headCover", "Head Cover", "None",
         ["None", "Cap", "Visor", "Headband", "Ear warmers", "Buff", "Light beanie", "Beanie", "Balaclava"]),
        ("tops", "Tops", "T-shirt",
         ["Singlet", "T-shirt", "Long sleeve", "Base layer + vest", "Base layer + jacket"]),
        ("bottoms", "Bottoms", "Shorts",
         ["Short shorts", "Shorts", "Capris", "Tights", "Thermal tights", "Wind pants"]),
        ("shoes", "Shoes", "Running shoes",
         ["Running shoes", "Trail shoes", "Waterproof running shoes"]),
        ("socks", "Socks", "Regular",
         ["No-show", "Regular", "Wool", "Thermal"]),
        ("gloves", "Gloves", "None",
         ["None", "Light gloves", "Heavy gloves", "Mittens"]),
        ("rainGear", "Rain Gear", "None",
         ["None", "Wind jacket", "Light rain jacket", "Waterproof jacket"]),
        ("accessories", "Accessories", "None",
         ["None", "Sunglasses", "Headlamp", "Reflective vest", "Headlamp + reflective vest"]),
    ],
    "trail_running": [
        ("headCover", "Head Cover", "None",
         ["None", "Cap", "Visor", "Buff", "Headband", "Beanie", "Balaclava"]),
        ("tops", "Tops", "T-shirt",
         ["Singlet", "T-shirt", "Long sleeve", "Base layer + vest", "Base layer + jacket"]),
        ("bottoms", "Bottoms", "Shorts",
         ["Short shorts", "Shorts", "Capris", "Tights", "Thermal tights"]),
        ("shoes", "Shoes", "Trail shoes",
         ["Light trail shoes", "Trail shoes", "Waterproof trail shoes"]),
        ("socks", "Socks", "Regular",
         ["No-show", "Regular", "Wool", "Thermal"]),
        ("gloves", "Gloves", "None",
         ["None", "Light gloves", "Heavy gloves", "Mittens"]),
        ("rainGear", "Rain / Wind Shell", "None",
         ["None", "Wind jacket", "Light rain jacket", "Waterproof jacket"]),
        ("hydration", "Hydration", "None",
         ["None", "Handheld bottle", "Waist belt", "Hydration vest"]),
        ("accessories", "Accessories", "None",
         ["None", "Sunglasses", "Headlamp", "Poles"]),
    ],
    "hiking": [
        ("headCover", "Head Cover", "None",
         ["None", "Cap", "Sun hat", "Buff", "Headband", "Beanie", "Balaclava"]),
        ("baseLayer", "Base Layer", "T-shirt",
         ["Tank top", "T-shirt", "Sun shirt", "Long sleeve", "Merino base"]),
        ("midLayer", "Mid Layer", "None",
         ["None", "Light fleece", "Fleece", "Light puffy", "Heavy puffy"]),
        ("outerLayer", "Outer Layer", "None",
         ["None", "Wind jacket", "Rain jacket", "Softshell", "Hardshell", "Insulated jacket"]),
        ("bottoms", "Bottoms", "Hiking pants",
         ["Shorts", "Convertible pants", "Hiking pants", "Softshell pants", "Rain pants", "Insulated pants"]),
        ("shoes", "Footwear", "Hiking shoes",
         ["Sandals", "Trail runners", "Hiking shoes", "Hiking boots", "Waterproof boots"]),
        ("socks", "Socks", "Hiking socks",
         ["Light hiking", "Hiking socks", "Heavy wool"]),
        ("gloves", "Gloves", "None",
         ["None", "Light gloves", "Insulated gloves", "Mittens"]),
        ("pack", "Pack", "Daypack (20L)",
         ["Waist pack", "Daypack (20L)", "Daypack (30L)"]),
        ("accessories", "Accessories", "None",
         ["None", "Sunglasses", "Headlamp", "Trekking poles"]),
    ],
    "walking": [
        ("headCover", "Head Cover", "None",
         ["None", "Cap", "Sun hat", "Ear warmers", "Beanie"]),
        ("tops", "Tops", "T-shirt",
         ["Tank top", "T-shirt", "Long sleeve", "Sweater", "Fleece"]),
        ("outerLayer", "Outer Layer", "None",
         ["None", "Light jacket", "Rain jacket", "Down jacket", "Winter coat"]),
        ("bottoms", "Bottoms", "Casual pants",
         ["Shorts", "Casual pants", "Fleece-lined leggings", "Insulated pants"]),
        ("shoes", "Shoes", "Sneakers",
         ["Sandals", "Sneakers", "Walking shoes", "Boots", "Waterproof boots"]),
        ("socks", "Socks", "Regular",
         ["No-show", "Regular", "Wool", "Thick"]),
        ("gloves", "Gloves", "None",
         ["None", "Light gloves", "Warm gloves"]),
        ("accessories", "Accessories", "None",
         ["None", "Sunglasses", "Umbrella", "Scarf", "Reflective vest"]),
    ],
    "cycling": [
        ("helmet", "Helmet", "Road helmet",
         ["Road helmet", "MTB helmet", "Aero helmet"]),
        ("tops", "Jersey", "Short sleeve jersey",
         ["Sleeveless jersey", "Short sleeve jersey", "Jersey + vest", "Long sleeve jersey",
          "Jersey + jacket", "Thermal jersey"]),
        ("bottoms", "Bottoms", "Bib shorts",
         ["Shorts", "Bib shorts", "3/4 bibs", "Bib tights", "Thermal bib tights"]),
        ("shoes", "Shoes", "Road shoes",
         ["Road shoes", "MTB shoes", "Shoe covers", "Winter cycling boots"]),
        ("socks", "Socks", "Cycling socks",
         ["No-show", "Cycling socks", "Wool socks", "Thermal socks"]),
        ("gloves", "Gloves", "None",
         ["None", "Fingerless", "Full finger light", "Thermal gloves", "Lobster gloves"]),
        ("armWarmers", "Arm / Leg Warmers", "None",
         ["None", "Arm warmers", "Knee warmers", "Leg warmers", "Arm + leg warmers"]),
        ("eyewear", "Eyewear", "Sunglasses",
         ["None", "Sunglasses", "Photochromic", "Clear glasses"]),
        ("rainGear", "Rain Gear", "None",
         ["None", "Rain jacket", "Full rain kit"]),
        ("accessories", "Accessories", "None",
         ["None", "Lights", "Lights + vest"]),
    ],
    "snowshoeing": [
        ("headCover", "Head Cover", "Beanie",
         ["None", "Fleece headband", "Beanie", "Balaclava"]),
        ("baseLayer", "Base Layer", "Merino base",
         ["Light synthetic", "Merino base", "Heavy merino", "Expedition weight"]),
        ("midLayer", "Mid Layer", "Fleece",
         ["None", "Light fleece", "Fleece", "Heavy puffy"]),
        ("outerLayer", "Outer Layer", "Softshell",
         ["None", "Wind jacket", "Softshell", "Hardshell", "Insulated jacket"]),
        ("bottoms", "Bottoms", "Softshell pants",
         ["Hiking pants", "Softshell pants", "Insulated pants", "Bibs"]),
        ("boots", "Boots", "Winter boots",
         ["Hiking boots", "Winter hiking boots", "Winter boots", "Pac boots"]),
        ("socks", "Socks", "Wool",
         ["Wool", "Heavy wool", "Liner + wool"]),
        ("gloves", "Gloves", "Insulated gloves",
         ["None", "Light gloves", "Insulated gloves", "Heavy mittens", "Liner + mittens"]),
        ("gaiters", "Gaiters", "Gaiters",
         ["None", "Low gaiters", "Gaiters", "Full gaiters"]),
        ("accessories", "Accessories", "Poles",
         ["Poles", "Poles + sunglasses", "Poles + goggles", "Headlamp + poles"]),
    ],
    "cross_country_skiing": [
        ("headCover", "Head Cover", "Headband",
         ["None", "Headband", "Light beanie", "Beanie", "Balaclava"]),
        ("baseLayer", "Base Layer", "Light synthetic",
         ["Light synthetic", "Merino base"]),
        ("tops", "Tops", "XC jacket",
         ["Race suit top", "Soft shell", "XC jacket", "Wind jacket + fleece"]),
        ("bottoms", "Bottoms", "XC pants",
         ["Race suit tights", "XC pants", "Wind pants over tights"]),
        ("boots", "Boots", "Classic boots",
         ["Classic boots", "Skate boots", "Insulated boots"]),
        ("socks", "Socks", "XC socks",
         ["Thin socks", "XC socks", "Wool socks"]),
        ("gloves", "Gloves", "XC gloves",
         ["None", "Light gloves", "XC gloves", "Lobster mitts", "Heavy mittens"]),
        ("eyewear", "Eyewear", "Sunglasses",
         ["None", "Sunglasses", "Clear glasses", "Goggles"]),
        ("accessories", "Accessories", "None",
         ["None", "Neck gaiter", "Neck gaiter + hand warmers", "Headlamp"]),
    ],
}


BAND_DEFAULTS = {
    "running": {
        "extremeCold": {"headCover": "Balaclava", "tops": "Base layer + jacket", "bottoms": "Thermal tights",
                        "shoes": "Running shoes", "socks": "Thermal", "gloves": "Mittens",
                        "rainGear": "None", "accessories": "None"},
        "freezing": {"headCover": "Balaclava", "tops": "Base layer + jacket", "bottoms": "Tights",
                     "shoes": "Running shoes", "socks": "Wool", "gloves": "Heavy gloves",
                     "rainGear": "None", "accessories": "None"},
        "veryCold": {"headCover": "Beanie", "tops": "Base layer + jacket", "bottoms": "Tights",
                     "shoes": "Running shoes", "socks": "Wool", "gloves": "Heavy gloves",
                     "rainGear": "None", "accessories": "None"},
        "cold": {"headCover": "Beanie", "tops": "Long sleeve", "bottoms": "Tights",
                 "shoes": "Running shoes", "socks": "Wool", "gloves": "Light gloves",
                 "rainGear": "None", "accessories": "None"},
        "cool": {"headCover": "Headband", "tops": "Long sleeve", "bottoms": "Tights",
                 "shoes": "Running shoes", "socks": "Regular", "gloves": "None",
                 "rainGear": "None", "accessories": "None"},
        "mild": {"headCover": "None", "tops": "T-shirt", "bottoms": "Shorts",
                 "shoes": "Running shoes", "socks": "Regular", "gloves": "None",
                 "rainGear": "None", "accessories": "None"},
        "warm": {"headCover": "Cap", "tops": "T-shirt", "bottoms": "Shorts",
                 "shoes": "Running shoes", "socks": "No-show", "gloves": "None",
                 "rainGear": "None", "accessories": "None"},
        "hot": {"headCover": "Cap", "tops": "Singlet", "bottoms": "Short shorts",
                "shoes": "Running shoes", "socks": "No-show", "gloves": "None",
                "rainGear": "None", "accessories": "None"},
    },
    "trail_running": {
        "extremeCold": {"headCover": "Balaclava", "tops": "Base layer + jacket", "bottoms": "Thermal tights",
                        "shoes": "Trail shoes", "socks": "Thermal", "gloves": "Mittens",
                        "rainGear": "Wind jacket", "hydration": "Hydration vest", "accessories": "None"},
        "freezing": {"headCover": "Balaclava", "tops": "Base layer + jacket", "bottoms": "Tights",
                     "shoes": "Trail shoes", "socks": "Wool", "gloves": "Heavy gloves",
                     "rainGear": "Wind jacket", "hydration": "Hydration vest", "accessories": "None"},
        "veryCold": {"headCover": "Beanie", "tops": "Base layer + jacket", "bottoms": "Tights",
                     "shoes": "Trail shoes", "socks": "Wool", "gloves": "Heavy gloves",
                     "rainGear": "Wind jacket", "hydration": "Hydration vest", "accessories": "None"},
        "cold": {"headCover": "Beanie", "tops": "Long sleeve", "bottoms": "Tights",
                 "shoes": "Trail shoes", "socks": "Wool", "gloves": "Light gloves",
                 "rainGear": "None", "hydration": "Hydration vest", "accessories": "None"},
        "cool": {"headCover": "Buff", "tops": "Long sleeve", "bottoms": "Tights",
                 "shoes": "Trail shoes", "socks": "Regular", "gloves": "None",
                 "rainGear": "None", "hydration": "Hydration vest", "accessories": "None"},
        "mild": {"headCover": "Cap", "tops": "T-shirt", "bottoms": "Shorts",
                 "shoes": "Trail shoes", "socks": "Regular", "gloves": "None",
                 "rainGear": "None", "hydration": "Handheld bottle", "accessories": "None"},
        "warm": {"headCover": "Cap", "tops": "T-shirt", "bottoms": "Shorts",
                 "shoes": "Trail shoes", "socks": "No-show", "gloves": "None",
                 "rainGear": "None", "hydration": "Hydration vest", "accessories": "None"},
        "hot": {"headCover": "Cap", "tops": "Singlet", "bottoms": "Short shorts",
                "shoes": "Light trail shoes", "socks": "No-show", "gloves": "None",
                "rainGear": "None", "hydration": "Hydration vest", "accessories": "None"},
    },
    "hiking": {
        "extremeCold": {"headCover": "Balaclava", "baseLayer": "Merino base", "midLayer": "Heavy puffy",
                        "outerLayer": "Insulated jacket", "bottoms": "Insulated pants",
                        "shoes": "Waterproof boots", "socks": "Heavy wool", "gloves": "Mittens",
                        "pack": "Daypack (30L)", "accessories": "None"},
        "freezing": {"headCover": "Balaclava", "baseLayer": "Merino base", "midLayer": "Heavy puffy",
                     "outerLayer": "Insulated jacket", "bottoms": "Insulated pants",
                     "shoes": "Waterproof boots", "socks": "Heavy wool", "gloves": "Insulated gloves",
                     "pack": "Daypack (30L)", "accessories": "None"},
        "veryCold": {"headCover": "Beanie", "baseLayer": "Merino base", "midLayer": "Heavy puffy",
                     "outerLayer": "Hardshell", "bottoms": "Insulated pants",
                     "shoes": "Waterproof boots", "socks": "Heavy wool", "gloves": "Insulated gloves",
                     "pack": "Daypack (30L)", "accessories": "Trekking poles"},
        "cold": {"headCover": "Beanie", "baseLayer": "Merino base", "midLayer": "Fleece",
                 "outerLayer": "Wind jacket", "bottoms": "Softshell pants",
                 "shoes": "Hiking boots", "socks": "Hiking socks", "gloves": "Light gloves",
                 "pack": "Daypack (30L)", "accessories": "Trekking poles"},
        "cool": {"headCover": "Cap", "baseLayer": "Long sleeve", "midLayer": "Fleece",
                 "outerLayer": "None", "bottoms": "Hiking pants",
                 "shoes": "Hiking boots", "socks": "Hiking socks", "gloves": "None",
                 "pack": "Daypack (20L)", "accessories": "Trekking poles"},
        "mild": {"headCover": "Cap", "baseLayer": "T-shirt", "midLayer": "None",
                 "outerLayer": "None", "bottoms": "Hiking pants",
                 "shoes": "Hiking shoes", "socks": "Light hiking", "gloves": "None",
                 "pack": "Daypack (20L)", "accessories": "None"},
        "warm": {"headCover": "Sun hat", "baseLayer": "T-shirt", "midLayer": "None",
                 "outerLayer": "None", "bottoms": "Convertible pants",
                 "shoes": "Trail runners", "socks": "Light hiking", "gloves": "None",
                 "pack": "Daypack (20L)", "accessories": "None"},
        "hot": {"headCover": "Sun hat", "baseLayer": "Sun shirt", "midLayer": "None",
                "outerLayer": "None", "bottoms": "Shorts",
                "shoes": "Trail runners", "socks": "Light hiking", "gloves": "None",
                "pack": "Waist pack", "accessories": "None"},
    },
    "walking": {
        "extremeCold": {"headCover": "Beanie", "tops": "Fleece", "outerLayer": "Winter coat",
                        "bottoms": "Insulated pants", "shoes": "Waterproof boots", "socks": "Thick",
                        "gloves": "Warm gloves", "accessories": "Scarf"},
        "freezing": {"headCover": "Beanie", "tops": "Fleece", "outerLayer": "Winter coat",
                     "bottoms": "Insulated pants", "shoes": "Boots", "socks": "Thick",
                     "gloves": "Warm gloves", "accessories": "Scarf"},
        "veryCold": {"headCover": "Beanie", "tops": "Fleece", "outerLayer": "Winter coat",
                     "bottoms": "Fleece-lined leggings", "shoes": "Boots", "socks": "Thick",
                     "gloves": "Warm gloves", "accessories": "Scarf"},
        "cold": {"headCover": "Beanie", "tops": "Sweater", "outerLayer": "Down jacket",
                 "bottoms": "Fleece-lined leggings", "shoes": "Boots", "socks": "Wool",
                 "gloves": "Light gloves", "accessories": "None"},
        "cool": {"headCover": "Ear warmers", "tops": "Long sleeve", "outerLayer": "Light jacket",
                 "bottoms": "Casual pants", "shoes": "Walking shoes", "socks": "Regular",
                 "gloves": "None", "accessories": "None"},
        "mild": {"headCover": "None", "tops": "T-shirt", "outerLayer": "Light jacket",
                 "bottoms": "Casual pants", "shoes": "Sneakers", "socks": "Regular",
                 "gloves": "None", "accessories": "None"},
        "warm": {"headCover": "Cap", "tops": "T-shirt", "outerLayer": "None",
                 "bottoms": "Shorts", "shoes": "Sneakers", "socks": "No-show",
                 "gloves": "None", "accessories": "None"},
        "hot": {"headCover": "Sun hat", "tops": "T-shirt", "outerLayer": "None",
                "bottoms": "Shorts", "shoes": "Sandals", "socks": "No-show",
                "gloves": "None", "accessories": "None"},
    },
    "cycling": {
        "extremeCold": {"helmet": "Road helmet", "tops": "Thermal jersey", "bottoms": "Thermal bib tights",
                        "shoes": "Winter cycling boots", "socks": "Thermal socks", "gloves": "Lobster gloves",
                        "armWarmers": "Arm + leg warmers", "eyewear": "Clear glasses",
                        "rainGear": "None", "accessories": "None"},
        "freezing": {"helmet": "Road helmet", "tops": "Thermal jersey", "bottoms": "Bib tights",
                     "shoes": "Shoe covers", "socks": "Thermal socks", "gloves": "Lobster gloves",
                     "armWarmers": "Arm + leg warmers", "eyewear": "Clear glasses",
                     "rainGear": "None", "accessories": "None"},
        "veryCold": {"helmet": "Road helmet", "tops": "Jersey + jacket", "bottoms": "Bib tights",
                     "shoes": "Shoe covers", "socks": "Thermal socks", "gloves": "Lobster gloves",
                     "armWarmers": "Arm + leg warmers", "eyewear": "Clear glasses",
                     "rainGear": "None", "accessories": "None"},
        "cold": {"helmet": "Road helmet", "tops": "Jersey + jacket", "bottoms": "Bib tights",
                 "shoes": "Road shoes", "socks": "Wool socks", "gloves": "Thermal gloves",
                 "armWarmers": "Leg warmers", "eyewear": "Photochromic",
                 "rainGear": "None", "accessories": "None"},
        "cool": {"helmet": "Road helmet", "tops": "Long sleeve jersey", "bottoms": "3/4 bibs",
                 "shoes": "Road shoes", "socks": "Cycling socks", "gloves": "Full finger light",
                 "armWarmers": "Knee warmers", "eyewear": "Photochromic",
                 "rainGear": "None", "accessories": "None"},
        "mild": {"helmet": "Road helmet", "tops": "Short sleeve jersey", "bottoms": "Bib shorts",
                 "shoes": "Road shoes", "socks": "Cycling socks", "gloves": "Fingerless",
                 "armWarmers": "None", "eyewear": "Sunglasses",
                 "rainGear": "None", "accessories": "None"},
        "warm": {"helmet": "Road helmet", "tops": "Short sleeve jersey", "bottoms": "Bib shorts",
                 "shoes": "Road shoes", "socks": "Cycling socks", "gloves": "None",
                 "armWarmers": "None", "eyewear": "Sunglasses",
                 "rainGear": "None", "accessories": "None"},
        "hot": {"helmet": "Road helmet", "tops": "Sleeveless jersey", "bottoms": "Shorts",
                "shoes": "Road shoes", "socks": "No-show", "gloves": "None",
                "armWarmers": "None", "eyewear": "Sunglasses",
                "rainGear": "None", "accessories": "None"},
    },
    "snowshoeing": {
        "extremeCold": {"headCover": "Balaclava", "baseLayer": "Expedition weight", "midLayer": "Heavy puffy",
                        "outerLayer": "Insulated jacket", "bottoms": "Bibs", "boots": "Pac boots",
                        "socks": "Liner + wool", "gloves": "Liner + mittens", "gaiters": "Full gaiters",
                        "accessories": "Poles + goggles"},
        "freezing": {"headCover": "Balaclava", "baseLayer": "Expedition weight", "midLayer": "Heavy puffy",
                     "outerLayer": "Insulated jacket", "bottoms": "Bibs", "boots": "Pac boots",
                     "socks": "Liner + wool", "gloves": "Liner + mittens", "gaiters": "Full gaiters",
                     "accessories": "Poles + goggles"},
        "veryCold": {"headCover": "Balaclava", "baseLayer": "Heavy merino", "midLayer": "Heavy puffy",
                     "outerLayer": "Hardshell", "bottoms": "Insulated pants", "boots": "Winter boots",
                     "socks": "Heavy wool", "gloves": "Heavy mittens", "gaiters": "Gaiters",
                     "accessories": "Poles + goggles"},
        "cold": {"headCover": "Beanie", "baseLayer": "Merino base", "midLayer": "Fleece",
                 "outerLayer": "Softshell", "bottoms": "Softshell pants", "boots": "Winter boots",
                 "socks": "Heavy wool", "gloves": "Insulated gloves", "gaiters": "Gaiters",
                 "accessories": "Poles"},
        "cool": {"headCover": "Fleece headband", "baseLayer": "Light synthetic", "midLayer": "Light fleece",
                 "outerLayer": "Wind jacket", "bottoms": "Hiking pants", "boots": "Winter hiking boots",
                 "socks": "Wool", "gloves": "Light gloves", "gaiters": "Low gaiters",
                 "accessories": "Poles"},
        # Snowshoeing is unlikely above cool, but every band needs a sensible answer
        "mild": {"headCover": "Fleece headband", "baseLayer": "Light synthetic", "midLayer": "Light fleece",
                 "outerLayer": "None", "bottoms": "Hiking pants", "boots": "Hiking boots",
                 "socks": "Wool", "gloves": "None", "gaiters": "Low gaiters",
                 "accessories": "Poles"},
        "warm": {"headCover": "Fleece headband", "baseLayer": "Light synthetic", "midLayer": "None",
                 "outerLayer": "None", "bottoms": "Hiking pants", "boots": "Hiking boots",
                 "socks": "Wool", "gloves": "None", "gaiters": "None",
                 "accessories": "Poles"},
        "hot": {"headCover": "None", "baseLayer": "Light synthetic", "midLayer": "None",
                "outerLayer": "None", "bottoms": "Hiking pants", "boots": "Hiking boots",
                "socks": "Wool", "gloves": "None", "gaiters": "None",
                "accessories": "Poles"},
    },
    "cross_country_skiing": {
        "extremeCold": {"headCover": "Balaclava", "baseLayer": "Merino base", "tops": "Wind jacket + fleece",
                        "bottoms": "Wind pants over tights", "boots": "Insulated boots", "socks": "Wool socks",
                        "gloves": "Heavy mittens", "eyewear": "Goggles",
                        "accessories": "Neck gaiter + hand warmers"},
        "freezing": {"headCover": "Balaclava", "baseLayer": "Merino base", "tops": "Wind jacket + fleece",
                     "bottoms": "Wind pants over tights", "boots": "Insulated boots", "socks": "Wool socks",
                     "gloves": "Heavy mittens", "eyewear": "Goggles",
                     "accessories": "Neck gaiter + hand warmers"},
        "veryCold": {"headCover": "Beanie", "baseLayer": "Merino base", "tops": "XC jacket",
                     "bottoms": "XC pants", "boots": "Classic boots", "socks": "Wool socks",
                     "gloves": "Lobster mitts", "eyewear": "Goggles", "accessories": "Neck gaiter"},
        "cold": {"headCover": "Light beanie", "baseLayer": "Merino base", "tops": "XC jacket",
                 "bottoms": "XC pants", "boots": "Classic boots", "socks": "XC socks",
                 "gloves": "XC gloves", "eyewear": "Sunglasses", "accessories": "Neck gaiter"},
        "cool": {"headCover": "Headband", "baseLayer": "Light synthetic", "tops": "XC jacket",
                 "bottoms": "XC pants", "boots": "Classic boots", "socks": "XC socks",
                 "gloves": "Light gloves", "eyewear": "Sunglasses", "accessories": "None"},
        "mild": {"headCover": "Headband", "baseLayer": "Light synthetic", "tops": "Soft shell",
                 "bottoms": "Race suit tights", "boots": "Classic boots", "socks": "Thin socks",
                 "gloves": "Light gloves", "eyewear": "Sunglasses", "accessories": "None"},
        "warm": {"headCover": "Headband", "baseLayer": "Light synthetic", "tops": "Race suit top",
                 "bottoms": "Race suit tights", "boots": "Classic boots", "socks": "Thin socks",
                 "gloves": "None", "eyewear": "Sunglasses", "accessories": "None"},
        "hot": {"headCover": "None", "baseLayer": "Light synthetic", "tops": "Race suit top",
                "bottoms": "Race suit tights", "boots": "Classic boots", "socks": "Thin socks",
                "gloves": "None", "eyewear": "Sunglasses", "accessories": "None"},
    },
}


COLD_BANDS = ["extremeCold", "freezing", "veryCold", "cold"]

# (condition, category, value, bands or None for every band).
# Applied in order: rain, snow, wind, sun, dark.
WEATHER_MODIFIERS = {
    "running": [
        ("rain", "rainGear", "Waterproof jacket", COLD_BANDS),
        ("rain", "rainGear", "Light rain jacket", ["cool", "mild", "warm", "hot"]),
        ("wind", "tops", "Long sleeve", ["cool", "mild"]),
        ("sun", "accessories", "Sunglasses", None),
        ("dark", "accessories", "Headlamp + reflective vest", None),
    ],
    "trail_running": [
        ("rain", "rainGear", "Waterproof jacket", COLD_BANDS),
        ("rain", "rainGear", "Light rain jacket", ["cool", "mild", "warm", "hot"]),
        ("snow", "shoes", "Waterproof trail shoes", None),
        ("wind", "rainGear", "Wind jacket", ["cool", "mild"]),
        ("sun", "accessories", "Sunglasses", None),
        ("dark", "accessories", "Headlamp", None),
    ],
    "hiking": [
        ("rain", "outerLayer", "Rain jacket", None),
        ("rain", "bottoms", "Rain pants", None),
        ("snow", "shoes", "Waterproof boots", None),
        ("wind", "outerLayer", "Wind jacket", ["cool", "mild"]),
        ("sun", "accessories", "Sunglasses", None),
        ("dark", "accessories", "Headlamp", None),
    ],
    "walking": [
        ("rain", "outerLayer", "Rain jacket", None),
        ("rain", "accessories", "Umbrella", None),
        ("snow", "shoes", "Waterproof boots", None),
        ("sun", "accessories", "Sunglasses", None),
        ("dark", "accessories", "Reflective vest", None),
    ],
    "cycling": [
        ("rain", "rainGear", "Full rain kit", None),
        ("wind", "tops", "Jersey + vest", ["mild"]),
        ("sun", "eyewear", "Sunglasses", None),
        ("dark", "accessories", "Lights + vest", None),
        ("dark", "eyewear", "Clear glasses", None),
    ],
    "snowshoeing": [
        ("sun", "accessories", "Poles + sunglasses", None),
        ("dark", "accessories", "Headlamp + poles", None),
    ],
    "cross_country_skiing": [
        ("sun", "eyewear", "Sunglasses", None),
        ("dark", "eyewear", "Clear glasses", None),
        ("dark", "accessories", "Headlamp", None),
    ],
}


# (category, sunny item, dark item, neutral item). None means the slot has
# nothing to add in that lighting state.
LIGHTING_SLOTS = {
    "running": [("accessories", "Sunglasses", "Headlamp + reflective vest", "None")],
    "trail_running": [("accessories", "Sunglasses", "Headlamp", "None")],
    "hiking": [("accessories", "Sunglasses", "Headlamp", "None")],
    "walking": [("accessories", "Sunglasses", "Reflective vest", "None")],
    "cycling": [
        ("eyewear", "Sunglasses", "Clear glasses", "Photochromic"),
        ("accessories", None, "Lights + vest", "None"),
    ],
    "snowshoeing": [("accessories", "Poles + sunglasses", "Headlamp + poles", "Poles")],
    "cross_country_skiing": [
        ("eyewear", "Sunglasses", "Clear glasses", "None"),
        ("accessories", None, "Headlamp", "None"),
    ],
}


# Thermal parameters: (B baseline body-heat offset °C, wΔ feels-like weight).
# B rises and wΔ falls with the heat an activity generates.
THERMAL_PARAMS = {
    "walking": (0.5, 0.80),
    "hiking": (2.0, 0.65),
    "snowshoeing": (3.0, 0.60),
    "cycling": (4.0, 0.50),
    "cross_country_skiing": (4.5, 0.50),
    "trail_running": (5.5, 0.40),
    "running": (6.0, 0.35),
}

# T_comfort distance (°C) that still counts as a full match.
SIMILARITY_THRESHOLDS = {
    "walking": 1.5,
    "hiking": 2.0,
    "snowshoeing": 2.5,
    "cycling": 2.5,
    "cross_country_skiing": 3.0,
    "trail_running": 3.0,
    "running": 3.5,
}

ACTIVITY_NAMES = {
    "running": "Running",
    "trail_running": "Trail Running",
    "hiking": "Hiking",
    "walking": "Walking",
    "cycling": "Cycling",
    "snowshoeing": "Snowshoeing",
    "cross_country_skiing": "Cross Country Skiing",
}
