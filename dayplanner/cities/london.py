from ..schema import Location
from . import CityConfig, area

AREAS = [
    area("Fitzrovia", "neighborhood", "Camden/Westminster",
         ["artsy", "mixed-use", "historic"],
         ["Bloomsbury", "Marylebone", "Soho"],
         ["art galleries", "media companies", "restaurants", "pubs"],
         (2, 3, 4, 3)),
    area("Green Park", "area", "Westminster",
         ["royal park", "open space", "peaceful"],
         ["Mayfair", "St. James's", "Piccadilly"],
         ["picnics", "relaxation", "walking", "royal ceremonies"],
         (2, 3, 1, 4)),
    area("Mayfair", "neighborhood", "Westminster",
         ["luxury", "upscale", "historic"],
         ["Green Park", "Soho", "Hyde Park", "Marylebone"],
         ["luxury shopping", "fine dining", "art galleries", "hotels"],
         (2, 4, 3, 4)),
    area("Soho", "neighborhood", "Westminster",
         ["vibrant", "nightlife", "entertainment", "diverse"],
         ["Mayfair", "Fitzrovia", "Chinatown", "Covent Garden"],
         ["restaurants", "bars", "nightclubs", "theaters", "shopping"],
         (3, 4, 5, 5)),
    area("Covent Garden", "neighborhood", "Westminster/Camden",
         ["touristy", "lively", "theatrical", "shopping"],
         ["Soho", "Chinatown", "Bloomsbury", "Strand"],
         ["street performers", "theaters", "market stalls", "restaurants"],
         (3, 5, 5, 5)),
    area("Chinatown", "area", "Westminster",
         ["cultural", "vibrant", "food"],
         ["Soho", "Covent Garden", "Leicester Square"],
         ["dim sum", "bakeries", "festivals"],
         (2, 4, 5, 5)),
    area("Marylebone", "neighborhood", "Westminster",
         ["village feel", "upscale", "quiet", "boutique"],
         ["Fitzrovia", "Mayfair", "Regent's Park"],
         ["independent shops", "cafes", "Wallace Collection", "farmers market"],
         (2, 3, 2, 3)),
    area("Bloomsbury", "neighborhood", "Camden",
         ["literary", "academic", "historic", "quiet"],
         ["Fitzrovia", "Covent Garden", "King's Cross"],
         ["British Museum", "garden squares", "bookshops", "cafes"],
         (2, 4, 2, 3)),
    area("St. James's", "area", "Westminster",
         ["historic", "upscale", "royal", "quiet"],
         ["Green Park", "Mayfair", "Piccadilly", "Westminster"],
         ["gentlemen's clubs", "art galleries", "royal palaces"],
         (2, 3, 2, 3)),
    area("Piccadilly", "area", "Westminster",
         ["bustling", "touristy", "commercial"],
         ["Mayfair", "Soho", "Green Park", "St. James's"],
         ["shopping", "Royal Academy", "theaters"],
         (3, 5, 4, 5)),
    area("Hyde Park", "area", "Westminster",
         ["royal park", "open space", "scenic", "peaceful"],
         ["Mayfair", "Kensington", "Marylebone"],
         ["walking", "boating", "picnics", "outdoor concerts"],
         (2, 3, 2, 4)),
    area("Westminster", "area", "Westminster",
         ["historic", "political", "touristy"],
         ["St. James's", "South Bank"],
         ["Big Ben", "Westminster Abbey", "sightseeing"],
         (3, 5, 3, 5)),
    area("South Bank", "area", "Lambeth",
         ["cultural", "riverside", "lively", "artsy"],
         ["Westminster", "Borough", "Covent Garden"],
         ["Tate Modern", "theaters", "riverside walks", "street food"],
         (2, 4, 4, 5)),
    area("Borough", "neighborhood", "Southwark",
         ["foodie", "historic", "bustling"],
         ["South Bank", "London Bridge"],
         ["Borough Market", "street food", "pubs"],
         (3, 5, 3, 5)),
    area("King's Cross", "neighborhood", "Camden",
         ["regenerated", "modern", "transport hub"],
         ["Bloomsbury", "Camden Town"],
         ["Coal Drops Yard", "restaurants", "canal walks"],
         (4, 3, 3, 3)),
    area("Camden Town", "neighborhood", "Camden",
         ["alternative", "vibrant", "nightlife", "diverse"],
         ["King's Cross", "Regent's Park"],
         ["Camden Market", "live music", "street food", "vintage shopping"],
         (2, 4, 5, 5)),
    area("Regent's Park", "area", "Westminster/Camden",
         ["royal park", "open space", "peaceful", "family-friendly"],
         ["Marylebone", "Camden Town"],
         ["London Zoo", "rose gardens", "walking", "open air theatre"],
         (1, 3, 2, 3)),
    area("Kensington", "neighborhood", "Kensington and Chelsea",
         ["upscale", "cultural", "residential"],
         ["Hyde Park", "Chelsea", "Notting Hill"],
         ["museums", "Kensington Palace", "shopping"],
         (2, 4, 2, 4)),
    area("Chelsea", "neighborhood", "Kensington and Chelsea",
         ["upscale", "fashionable", "residential"],
         ["Kensington"],
         ["King's Road shopping", "Saatchi Gallery", "fine dining"],
         (2, 3, 3, 4)),
    area("Notting Hill", "neighborhood", "Kensington and Chelsea",
         ["colorful", "bohemian", "residential"],
         ["Kensington"],
         ["Portobello Road Market", "cafes", "vintage shopping"],
         (2, 3, 2, 5)),
    area("Shoreditch", "neighborhood", "Hackney",
         ["hipster", "trendy", "artistic", "nightlife"],
         ["Spitalfields"],
         ["street art", "bars", "vintage shopping", "coffee shops"],
         (2, 3, 5, 5)),
]

LONDON = CityConfig(
    key="london",
    name="London",
    timezone="Europe/London",
    region="uk",
    center=Location(lat=51.5074, lng=-0.1278),
    areas=AREAS,
    stations=[
        "Bank", "Embankment", "Liverpool Street", "Charing Cross",
        "Victoria", "Waterloo", "London Bridge", "Paddington", "Euston",
    ],
    colloquial_names={
        "Covent Garden": ["covent garden", "covent gdn", "the piazza"],
        "King's Cross": ["kings cross", "king's x", "kx", "kings x"],
        "St. James's": ["st james", "st james's", "st. james", "saint james"],
        "South Bank": ["southbank", "the south bank", "south bank"],
        "Camden Town": ["camden", "camden town", "camden market area"],
        "Soho": ["soho", "so ho"],
        "Westminster": ["westminster", "parliament", "whitehall"],
        "Piccadilly": ["piccadilly", "piccadilly circus area"],
        "Borough": ["borough", "borough market area"],
    },
    spelling_corrections={
        "picadilly": "Piccadilly",
        "piccadily": "Piccadilly",
        "mayfiar": "Mayfair",
        "fitzrovia": "Fitzrovia",
        "marleybone": "Marylebone",
        "marylebone": "Marylebone",
        "bloomsbery": "Bloomsbury",
        "shorditch": "Shoreditch",
        "leicester sq": "Leicester Square",
        "lester square": "Leicester Square",
        "trafalgar sq": "Trafalgar Square",
        "oxford st": "Oxford Street",
        "regent st": "Regent Street",
        "bond st": "Bond Street",
        "carnaby st": "Carnaby Street",
        "kensington": "Kensington",
        "nottinghill": "Notting Hill",
    },
    landmarks=[
        "Oxford Street", "Regent Street", "Bond Street", "Carnaby Street",
        "Leicester Square", "Piccadilly Circus", "Trafalgar Square",
        "British Museum", "National Gallery", "Tate Modern", "Borough Market",
        "London Eye", "Buckingham Palace", "Camden Market",
        "Natural History Museum", "Covent Garden Market", "Westminster Abbey",
    ],
    popular_defaults=["Covent Garden", "Soho", "Camden"],
    default_start={"morning": "Covent Garden", "midday": "Soho", "afternoon": "Covent Garden", "evening": "Soho"},
    vague_locations=["somewhere", "anywhere", "nearby", "around here", "london", "central london", "town", "the city"],
)
