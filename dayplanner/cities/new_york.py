from ..schema import Location
from . import CityConfig, area

AREAS = [
    area("Manhattan", "borough", "Manhattan",
         ["urban", "fast-paced", "commercial", "cultural"],
         ["Brooklyn", "Queens", "Bronx"],
         ["skyscrapers", "museums", "entertainment", "finance"],
         (4, 5, 4, 5)),
    area("Brooklyn", "borough", "Brooklyn",
         ["diverse", "trendy", "artistic", "historic"],
         ["Manhattan", "Queens"],
         ["brownstones", "parks", "food scene", "cultural diversity"],
         (3, 4, 4, 5)),
    area("Midtown", "neighborhood", "Manhattan",
         ["busy", "commercial", "touristy", "entertainment"],
         ["Times Square", "Chelsea", "Upper East Side", "Hell's Kitchen", "Murray Hill"],
         ["Empire State Building", "Times Square", "shopping", "Broadway shows"],
         (4, 5, 5, 5)),
    area("Greenwich Village", "neighborhood", "Manhattan",
         ["bohemian", "historic", "artistic", "lively"],
         ["SoHo", "East Village", "West Village", "NoHo", "Union Square"],
         ["NYU campus", "Washington Square Park", "jazz clubs", "historic architecture"],
         (3, 4, 5, 5)),
    area("SoHo", "neighborhood", "Manhattan",
         ["trendy", "artsy", "upscale", "shopping"],
         ["Greenwich Village", "Tribeca", "Chinatown", "Little Italy", "West Village"],
         ["designer boutiques", "cast-iron architecture", "art galleries", "upscale dining"],
         (2, 5, 4, 5)),
    area("Upper East Side", "neighborhood", "Manhattan",
         ["upscale", "sophisticated", "traditional", "elegant"],
         ["Central Park", "Midtown", "Harlem", "Upper West Side"],
         ["Museum Mile", "luxury apartments", "upscale shopping", "Central Park access"],
         (3, 4, 3, 4)),
    area("Upper West Side", "neighborhood", "Manhattan",
         ["residential", "cultural", "family-friendly", "intellectual"],
         ["Central Park", "Harlem", "Midtown", "Upper East Side"],
         ["Lincoln Center", "Natural History Museum", "Riverside Park", "brownstones"],
         (3, 4, 3, 4)),
    area("Central Park", "area", "Manhattan",
         ["urban park", "scenic", "recreational", "iconic"],
         ["Upper East Side", "Upper West Side", "Midtown", "Harlem"],
         ["walking paths", "Bethesda Fountain", "boating", "Central Park Zoo", "outdoor concerts"],
         (3, 4, 3, 5)),
    area("Williamsburg", "neighborhood", "Brooklyn",
         ["hipster", "trendy", "artistic", "gentrified"],
         ["Greenpoint", "Bushwick", "Bedford-Stuyvesant", "East Williamsburg"],
         ["nightlife", "music venues", "craft breweries", "waterfront views"],
         (2, 3, 5, 5)),
    area("Times Square", "area", "Manhattan",
         ["touristy", "bright", "bustling", "commercial"],
         ["Midtown", "Theater District", "Hell's Kitchen", "Garment District"],
         ["Broadway shows", "billboards", "shopping", "New Year's Eve"],
         (4, 5, 5, 5)),
    area("Financial District", "neighborhood", "Manhattan",
         ["financial", "historic", "business", "tourist"],
         ["Tribeca", "Chinatown", "Battery Park"],
         ["Wall Street", "One World Trade", "Stock Exchange", "Battery Park"],
         (5, 5, 2, 2)),
    area("Tribeca", "neighborhood", "Manhattan",
         ["upscale", "trendy", "residential", "artistic"],
         ["SoHo", "Financial District", "Chinatown"],
         ["restaurants", "converted lofts", "film festival", "art galleries"],
         (2, 3, 4, 4)),
    area("Chinatown", "neighborhood", "Manhattan",
         ["cultural", "vibrant", "historic", "food"],
         ["Little Italy", "Lower East Side", "SoHo", "Financial District"],
         ["dim sum", "markets", "festivals", "authentic Chinese cuisine"],
         (3, 5, 4, 5)),
    area("Little Italy", "neighborhood", "Manhattan",
         ["italian", "historic", "touristy", "food"],
         ["Chinatown", "NoLita", "SoHo", "Lower East Side"],
         ["italian restaurants", "San Gennaro Festival", "pastry shops", "cafes"],
         (2, 4, 5, 5)),
    area("Lower East Side", "neighborhood", "Manhattan",
         ["historic", "trendy", "diverse", "nightlife"],
         ["East Village", "Chinatown", "NoLita", "Two Bridges"],
         ["bars", "vintage shopping", "music venues", "tenement museum"],
         (2, 3, 5, 5)),
    area("East Village", "neighborhood", "Manhattan",
         ["bohemian", "youthful", "diverse", "artistic"],
         ["NoHo", "Greenwich Village", "Lower East Side", "Gramercy"],
         ["dive bars", "international cuisine", "vintage shops", "Tompkins Square Park"],
         (2, 4, 5, 5)),
    area("West Village", "neighborhood", "Manhattan",
         ["charming", "historic", "upscale", "quaint"],
         ["Greenwich Village", "Chelsea", "SoHo", "Meatpacking District"],
         ["brownstones", "cobblestone streets", "boutiques", "quiet restaurants"],
         (2, 4, 4, 5)),
    area("Chelsea", "neighborhood", "Manhattan",
         ["artistic", "trendy", "diverse", "shopping"],
         ["Greenwich Village", "Hell's Kitchen", "Flatiron District", "Meatpacking District"],
         ["High Line", "art galleries", "Chelsea Market", "piers"],
         (3, 4, 4, 5)),
    area("Hell's Kitchen", "neighborhood", "Manhattan",
         ["diverse", "foodie", "vibrant", "entertainment"],
         ["Midtown", "Chelsea", "Upper West Side", "Theater District"],
         ["restaurants", "theaters", "nightlife", "riverside parks"],
         (3, 4, 5, 4)),
    area("Flatiron District", "neighborhood", "Manhattan",
         ["historic", "business", "architectural", "trendy"],
         ["Chelsea", "Gramercy", "Murray Hill", "NoMad"],
         ["Flatiron Building", "Madison Square Park", "shopping", "dining"],
         (4, 5, 4, 4)),
    area("Gramercy", "neighborhood", "Manhattan",
         ["upscale", "quiet", "residential", "historic"],
         ["East Village", "Flatiron District", "Murray Hill", "Kips Bay"],
         ["Gramercy Park", "townhouses", "Union Square", "restaurants"],
         (3, 4, 3, 3)),
    area("Harlem", "neighborhood", "Manhattan",
         ["historic", "cultural", "diverse", "artistic"],
         ["Upper West Side", "Upper East Side", "East Harlem", "Washington Heights"],
         ["Apollo Theater", "soul food", "jazz clubs", "historic architecture"],
         (3, 3, 3, 4)),
    area("DUMBO", "neighborhood", "Brooklyn",
         ["trendy", "artistic", "industrial", "waterfront"],
         ["Brooklyn Heights", "Vinegar Hill", "Downtown Brooklyn"],
         ["waterfront views", "Brooklyn Bridge Park", "art galleries", "converted warehouses"],
         (2, 4, 3, 5)),
    area("Brooklyn Heights", "neighborhood", "Brooklyn",
         ["historic", "upscale", "quiet", "waterfront"],
         ["DUMBO", "Downtown Brooklyn", "Cobble Hill"],
         ["Promenade", "historic brownstones", "quiet streets", "waterfront views"],
         (2, 3, 2, 4)),
    area("Park Slope", "neighborhood", "Brooklyn",
         ["family-friendly", "historic", "residential", "foodie"],
         ["Prospect Heights", "Gowanus", "Windsor Terrace"],
         ["Prospect Park", "brownstones", "restaurants", "bars"],
         (3, 3, 3, 4)),
    area("Astoria", "neighborhood", "Queens",
         ["diverse", "cultural", "authentic", "food"],
         ["Long Island City", "Woodside", "Jackson Heights"],
         ["Greek food", "Astoria Park", "Museum of the Moving Image", "beer gardens"],
         (2, 3, 4, 4)),
]

NEW_YORK = CityConfig(
    key="new_york",
    name="New York",
    timezone="America/New_York",
    region="us",
    center=Location(lat=40.7580, lng=-73.9855),
    areas=AREAS,
    stations=["Grand Central", "Penn", "Atlantic Terminal", "Fulton Center", "Jamaica"],
    colloquial_names={
        "Greenwich Village": ["the village", "greenwich village", "greenwich", "washington square area"],
        "Financial District": ["fidi", "financial district", "wall street area", "downtown"],
        "Hell's Kitchen": ["hells kitchen", "hell's kitchen", "clinton"],
        "Upper East Side": ["ues", "upper east", "museum mile area"],
        "Upper West Side": ["uws", "upper west"],
        "Lower East Side": ["les", "lower east"],
        "Flatiron District": ["flatiron", "nomad"],
        "Times Square": ["times sq", "theater district", "broadway"],
        "Williamsburg": ["billyburg", "williamsburg"],
        "SoHo": ["soho", "south of houston"],
    },
    spelling_corrections={
        "greenwhich village": "Greenwich Village",
        "greenwich vilage": "Greenwich Village",
        "tribecca": "Tribeca",
        "chealsea": "Chelsea",
        "willamsburg": "Williamsburg",
        "williamsberg": "Williamsburg",
        "harlam": "Harlem",
        "gramercey": "Gramercy",
        "soho": "SoHo",
        "dumbo": "DUMBO",
        "5th ave": "Fifth Avenue",
        "fifth ave": "Fifth Avenue",
        "bway": "Broadway",
    },
    landmarks=[
        "Fifth Avenue", "Broadway", "Wall Street", "High Line", "Chelsea Market",
        "Central Park", "Times Square", "Rockefeller Center", "Empire State Building",
        "Brooklyn Bridge", "Washington Square Park", "Union Square",
        "Metropolitan Museum", "MoMA", "Bryant Park", "Battery Park",
    ],
    popular_defaults=["Midtown", "Greenwich Village", "SoHo"],
    default_start={"morning": "Midtown", "midday": "Midtown", "afternoon": "SoHo", "evening": "Greenwich Village"},
    vague_locations=["somewhere", "anywhere", "nearby", "around here", "new york", "nyc", "the city", "town"],
)
