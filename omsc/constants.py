"""Constants and mappings for OMSC statistics."""

BASE_URL = 'https://onlinemusicsongcontest.miraheze.org/wiki/'

# Wiki page identifiers
WIKI_PAGES = {
    'COUNTRIES_A': 'List_of_countries_in_the_Online_Music_Song_Contest_(A-L)',
    'COUNTRIES_B': 'List_of_countries_in_the_Online_Music_Song_Contest_(M-Z)',
    'MEMBERS_A': 'List_of_members_in_the_Online_Music_Song_Contest_(A-L)',
    'MEMBERS_B': 'List_of_members_in_the_Online_Music_Song_Contest_(M-Z)',
}

COUNTRY_PAGES = [WIKI_PAGES['COUNTRIES_A'], WIKI_PAGES['COUNTRIES_B']]
MEMBER_PAGES = [WIKI_PAGES['MEMBERS_A'], WIKI_PAGES['MEMBERS_B']]

# History table headings
EDITION_COLUMN = 'Edition'
POINTS_COLUMN = 'Points'
GF_PLACE_COLUMN = 'GF Place'
GF_POINTS_COLUMN = 'GF Points'
SF_POINTS_COLUMN = 'SF Points'

# Leaderboard glyphs
MEDALS = {1: '🥇', 2: '🥈', 3: '🥉'}
EMPHASIS = '**'
TIE_MARKER = '(=)'
VERIFIED_BADGE = ':verified:'
UNKNOWN_FLAG = '❓'

# Roster markup
ROSTER_BULLET = '•'

# Member status thresholds (total appearances)
VETERAN_THRESHOLD = 15
ESTABLISHED_THRESHOLD = 14

# Output files
OUTPUT_DIR = 'dist'
OUTPUT_FILES = {
    'totals': 'all-time-results.txt',
    'averages': 'average-scores-final.txt',
    'placements': 'average-scores-members.txt',
    'participation': 'last-countries-participations.txt',
}

# Common country names that pycountry doesn't match -> ISO 3166-1 alpha-2
COUNTRY_ALIASES = {
    'bahamas': 'BS', 'the bahamas': 'BS',
    'bolivia': 'BO',
    'brunei': 'BN',
    'burma': 'MM',
    'cape verde': 'CV', 'cabo verde': 'CV',
    'czech republic': 'CZ',
    'democratic republic of the congo': 'CD', 'dr congo': 'CD',
    'republic of the congo': 'CG', 'congo': 'CG',
    'east timor': 'TL', 'timor-leste': 'TL',
    'gambia': 'GM', 'the gambia': 'GM',
    'holy see': 'VA', 'vatican city': 'VA', 'vatican': 'VA',
    'iran': 'IR',
    'ivory coast': 'CI', "cote d'ivoire": 'CI', "côte d'ivoire": 'CI',
    'kosovo': 'XK',
    'laos': 'LA',
    'macedonia': 'MK', 'north macedonia': 'MK',
    'micronesia': 'FM', 'federated states of micronesia': 'FM',
    'moldova': 'MD',
    'north korea': 'KP',
    'palestine': 'PS',
    'russia': 'RU',
    'saint kitts and nevis': 'KN',
    'saint vincent and the grenadines': 'VC',
    'sao tome and principe': 'ST', 'são tomé and príncipe': 'ST',
    'south korea': 'KR', 'korea': 'KR',
    'swaziland': 'SZ', 'eswatini': 'SZ',
    'syria': 'SY',
    'taiwan': 'TW',
    'tanzania': 'TZ',
    'turkey': 'TR', 'turkiye': 'TR',
    'united kingdom': 'GB', 'uk': 'GB', 'great britain': 'GB',
    'united states': 'US', 'usa': 'US', 'united states of america': 'US',
    'venezuela': 'VE',
    'vietnam': 'VN',
}
