from collections import namedtuple
from types import MappingProxyType

import config

# A place the radar map can be centred on
Location = namedtuple("Location", ["key", "kanji_name", "lat", "lon"])

# Prefecture name -> (kanji name, latitude, longitude) of the prefectural office
_prefecture_coordinates = {
    "hokkaido": ("北海道", 43.06417, 141.34694),
    "aomori": ("青森県", 40.82444, 140.74),
    "iwate": ("岩手県", 39.70361, 141.1525),
    "miyagi": ("宮城県", 38.26889, 140.87194),
    "akita": ("秋田県", 39.71861, 140.1025),
    "yamagata": ("山形県", 38.24056, 140.36333),
    "fukushima": ("福島県", 37.75, 140.46778),
    "ibaraki": ("茨城県", 36.34139, 140.44667),
    "tochigi": ("栃木県", 36.56583, 139.88361),
    "gunma": ("群馬県", 36.39111, 139.06083),
    "saitama": ("埼玉県", 35.85694, 139.64889),
    "chiba": ("千葉県", 35.60472, 140.12333),
    "tokyo": ("東京都", 35.68944, 139.69167),
    "kanagawa": ("神奈川県", 35.44778, 139.6425),
    "niigata": ("新潟県", 37.90222, 139.02361),
    "toyama": ("富山県", 36.69528, 137.21139),
    "ishikawa": ("石川県", 36.59444, 136.62556),
    "fukui": ("福井県", 36.06528, 136.22194),
    "yamanashi": ("山梨県", 35.66389, 138.56833),
    "nagano": ("長野県", 36.65139, 138.18111),
    "gifu": ("岐阜県", 35.39111, 136.72222),
    "shizuoka": ("静岡県", 34.97694, 138.38306),
    "aichi": ("愛知県", 35.18028, 136.90667),
    "mie": ("三重県", 34.73028, 136.50861),
    "shiga": ("滋賀県", 35.00444, 135.86833),
    "kyoto": ("京都府", 35.02139, 135.75556),
    "osaka": ("大阪府", 34.68639, 135.52),
    "hyogo": ("兵庫県", 34.93228, 134.89879114),
    "nara": ("奈良県", 34.68528, 135.83278),
    "wakayama": ("和歌山県", 34.22611, 135.1675),
    "tottori": ("鳥取県", 35.50361, 134.23833),
    "shimane": ("島根県", 35.47222, 133.05056),
    "okayama": ("岡山県", 34.66167, 133.935),
    "hiroshima": ("広島県", 34.39639, 132.45944),
    "yamaguchi": ("山口県", 34.18583, 131.47139),
    "tokushima": ("徳島県", 34.06583, 134.55944),
    "kagawa": ("香川県", 34.34028, 134.04333),
    "ehime": ("愛媛県", 33.84167, 132.76611),
    "kochi": ("高知県", 33.55972, 133.53111),
    "fukuoka": ("福岡県", 33.60639, 130.41806),
    "saga": ("佐賀県", 33.24944, 130.29889),
    "nagasaki": ("長崎県", 32.74472, 129.87361),
    "kumamoto": ("熊本県", 32.78972, 130.74167),
    "oita": ("大分県", 33.23806, 131.6125),
    "miyazaki": ("宮崎県", 31.91111, 131.42389),
    "kagoshima": ("鹿児島県", 31.56028, 130.55806),
    "okinawa": ("沖縄県", 26.2125, 127.68111),
}

# Alternate romanisations people actually type
_aliases = {
    "oosaka": "osaka",
    "ohsaka": "osaka",
    "nigata": "niigata",
    "hyougo": "hyogo",
    "kouchi": "kochi",
    "ooita": "oita",
    "ohita": "oita",
}


def _build_table():
    table = {
        name: Location(name, kanji, lat, lon)
        for name, (kanji, lat, lon) in _prefecture_coordinates.items()
    }
    for alias, canonical in _aliases.items():
        table[alias] = table[canonical]
    return MappingProxyType(table)


prefectures = _build_table()


def find_location(name):
    """
    Looks up a prefecture by (case-insensitive) name.

    Unknown or missing names fall back to the default location, so a typo
    still produces a radar map instead of an error.
    """
    key = (name or "").strip().lower()
    return prefectures.get(key, prefectures[config.DEFAULT_LOCATION])
