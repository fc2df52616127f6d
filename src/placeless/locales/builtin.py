"""Bundled locale tables.

Calendar names and separators follow CLDR. Collation tailorings cover the
common cases: Nordic letters after "z", Spanish "ñ", Turkish and
Azerbaijani dotless i, Czech "ch" contraction.
"""

from __future__ import annotations

from placeless.locales.data import (
    CalendarNames,
    CasingOperation,
    CollationTable,
    LocaleData,
    SpecialCasingRule,
)

BUILTIN_VERSION = "2024.1"

_NBSP = "\u00a0"
_NNBSP = "\u202f"


# ==============================================================================
# Calendar Names
# ==============================================================================

_EN_CALENDAR = CalendarNames(
    months_wide=(
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    months_abbreviated=(
        "Jan", "Feb", "Mar", "Apr", "May", "Jun",
        "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    ),
    days_wide=(
        "Sunday", "Monday", "Tuesday", "Wednesday",
        "Thursday", "Friday", "Saturday",
    ),
    days_abbreviated=("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"),
)

_EN_GB_CALENDAR = CalendarNames(
    months_wide=_EN_CALENDAR.months_wide,
    months_abbreviated=_EN_CALENDAR.months_abbreviated,
    days_wide=_EN_CALENDAR.days_wide,
    days_abbreviated=_EN_CALENDAR.days_abbreviated,
    am="am",
    pm="pm",
    patterns={
        "date_short": "dd/MM/y",
        "date_medium": "d MMM y",
        "date_long": "d MMMM y",
        "date_full": "EEEE, d MMMM y",
        "time_short": "HH:mm",
        "time_medium": "HH:mm:ss",
        "time_long": "HH:mm:ss XXX",
        "time_full": "HH:mm:ss XXX VV",
    },
)

_DE_CALENDAR = CalendarNames(
    months_wide=(
        "Januar", "Februar", "März", "April", "Mai", "Juni",
        "Juli", "August", "September", "Oktober", "November", "Dezember",
    ),
    months_abbreviated=(
        "Jan.", "Feb.", "März", "Apr.", "Mai", "Juni",
        "Juli", "Aug.", "Sept.", "Okt.", "Nov.", "Dez.",
    ),
    days_wide=(
        "Sonntag", "Montag", "Dienstag", "Mittwoch",
        "Donnerstag", "Freitag", "Samstag",
    ),
    days_abbreviated=("So.", "Mo.", "Di.", "Mi.", "Do.", "Fr.", "Sa."),
    patterns={
        "date_short": "dd.MM.yy",
        "date_medium": "dd.MM.y",
        "date_long": "d. MMMM y",
        "date_full": "EEEE, d. MMMM y",
        "time_short": "HH:mm",
        "time_medium": "HH:mm:ss",
        "time_long": "HH:mm:ss XXX",
        "time_full": "HH:mm:ss XXX VV",
        "datetime": "{date}, {time}",
    },
)

_FR_CALENDAR = CalendarNames(
    months_wide=(
        "janvier", "février", "mars", "avril", "mai", "juin",
        "juillet", "août", "septembre", "octobre", "novembre", "décembre",
    ),
    months_abbreviated=(
        "janv.", "févr.", "mars", "avr.", "mai", "juin",
        "juil.", "août", "sept.", "oct.", "nov.", "déc.",
    ),
    days_wide=("dimanche", "lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi"),
    days_abbreviated=("dim.", "lun.", "mar.", "mer.", "jeu.", "ven.", "sam."),
    patterns={
        "date_short": "dd/MM/y",
        "date_medium": "d MMM y",
        "date_long": "d MMMM y",
        "date_full": "EEEE d MMMM y",
        "time_short": "HH:mm",
        "time_medium": "HH:mm:ss",
        "time_long": "HH:mm:ss XXX",
        "time_full": "HH:mm:ss XXX VV",
        "datetime": "{date} 'à' {time}",
    },
)

_ES_CALENDAR = CalendarNames(
    months_wide=(
        "enero", "febrero", "marzo", "abril", "mayo", "junio",
        "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
    ),
    months_abbreviated=(
        "ene", "feb", "mar", "abr", "may", "jun",
        "jul", "ago", "sept", "oct", "nov", "dic",
    ),
    days_wide=("domingo", "lunes", "martes", "miércoles", "jueves", "viernes", "sábado"),
    days_abbreviated=("dom", "lun", "mar", "mié", "jue", "vie", "sáb"),
    am="a. m.",
    pm="p. m.",
    patterns={
        "date_short": "d/M/yy",
        "date_medium": "d MMM y",
        "date_long": "d 'de' MMMM 'de' y",
        "date_full": "EEEE, d 'de' MMMM 'de' y",
        "time_short": "H:mm",
        "time_medium": "H:mm:ss",
        "time_long": "H:mm:ss XXX",
        "time_full": "H:mm:ss XXX VV",
    },
)

_SV_CALENDAR = CalendarNames(
    months_wide=(
        "januari", "februari", "mars", "april", "maj", "juni",
        "juli", "augusti", "september", "oktober", "november", "december",
    ),
    months_abbreviated=(
        "jan.", "feb.", "mars", "apr.", "maj", "juni",
        "juli", "aug.", "sep.", "okt.", "nov.", "dec.",
    ),
    days_wide=("söndag", "måndag", "tisdag", "onsdag", "torsdag", "fredag", "lördag"),
    days_abbreviated=("sön", "mån", "tis", "ons", "tors", "fre", "lör"),
    am="fm",
    pm="em",
    patterns={
        "date_short": "y-MM-dd",
        "date_medium": "d MMM y",
        "date_long": "d MMMM y",
        "date_full": "EEEE d MMMM y",
        "time_short": "HH:mm",
        "time_medium": "HH:mm:ss",
        "time_long": "HH:mm:ss XXX",
        "time_full": "HH:mm:ss XXX VV",
    },
)

_DA_CALENDAR = CalendarNames(
    months_wide=(
        "januar", "februar", "marts", "april", "maj", "juni",
        "juli", "august", "september", "oktober", "november", "december",
    ),
    months_abbreviated=(
        "jan.", "feb.", "mar.", "apr.", "maj", "jun.",
        "jul.", "aug.", "sep.", "okt.", "nov.", "dec.",
    ),
    days_wide=("søndag", "mandag", "tirsdag", "onsdag", "torsdag", "fredag", "lørdag"),
    days_abbreviated=("søn.", "man.", "tirs.", "ons.", "tors.", "fre.", "lør."),
    patterns={
        "date_short": "dd.MM.y",
        "date_medium": "d. MMM y",
        "date_long": "d. MMMM y",
        "date_full": "EEEE 'den' d. MMMM y",
        "time_short": "HH.mm",
        "time_medium": "HH.mm.ss",
        "time_long": "HH.mm.ss XXX",
        "time_full": "HH.mm.ss XXX VV",
    },
)

_TR_CALENDAR = CalendarNames(
    months_wide=(
        "Ocak", "Şubat", "Mart", "Nisan", "Mayıs", "Haziran",
        "Temmuz", "Ağustos", "Eylül", "Ekim", "Kasım", "Aralık",
    ),
    months_abbreviated=(
        "Oca", "Şub", "Mar", "Nis", "May", "Haz",
        "Tem", "Ağu", "Eyl", "Eki", "Kas", "Ara",
    ),
    days_wide=("Pazar", "Pazartesi", "Salı", "Çarşamba", "Perşembe", "Cuma", "Cumartesi"),
    days_abbreviated=("Paz", "Pzt", "Sal", "Çar", "Per", "Cum", "Cmt"),
    am="ÖÖ",
    pm="ÖS",
    patterns={
        "date_short": "d.MM.y",
        "date_medium": "d MMM y",
        "date_long": "d MMMM y",
        "date_full": "d MMMM y EEEE",
        "time_short": "HH:mm",
        "time_medium": "HH:mm:ss",
        "time_long": "HH:mm:ss XXX",
        "time_full": "HH:mm:ss XXX VV",
    },
)

_AZ_CALENDAR = CalendarNames(
    months_wide=(
        "yanvar", "fevral", "mart", "aprel", "may", "iyun",
        "iyul", "avqust", "sentyabr", "oktyabr", "noyabr", "dekabr",
    ),
    months_abbreviated=(
        "yan", "fev", "mar", "apr", "may", "iyn",
        "iyl", "avq", "sen", "okt", "noy", "dek",
    ),
    days_wide=(
        "bazar", "bazar ertəsi", "çərşənbə axşamı", "çərşənbə",
        "cümə axşamı", "cümə", "şənbə",
    ),
    days_abbreviated=("B.", "B.e.", "Ç.a.", "Ç.", "C.a.", "C.", "Ş."),
    patterns={
        "date_short": "dd.MM.yy",
        "date_medium": "d MMM y",
        "date_long": "d MMMM y",
        "date_full": "d MMMM y, EEEE",
        "time_short": "HH:mm",
        "time_medium": "HH:mm:ss",
        "time_long": "HH:mm:ss XXX",
        "time_full": "HH:mm:ss XXX VV",
    },
)

_CS_CALENDAR = CalendarNames(
    months_wide=(
        "ledna", "února", "března", "dubna", "května", "června",
        "července", "srpna", "září", "října", "listopadu", "prosince",
    ),
    months_abbreviated=(
        "led", "úno", "bře", "dub", "kvě", "čvn",
        "čvc", "srp", "zář", "říj", "lis", "pro",
    ),
    days_wide=("neděle", "pondělí", "úterý", "středa", "čtvrtek", "pátek", "sobota"),
    days_abbreviated=("ne", "po", "út", "st", "čt", "pá", "so"),
    am="dop.",
    pm="odp.",
    patterns={
        "date_short": "dd.MM.yy",
        "date_medium": "d. M. y",
        "date_long": "d. MMMM y",
        "date_full": "EEEE d. MMMM y",
        "time_short": "H:mm",
        "time_medium": "H:mm:ss",
        "time_long": "H:mm:ss XXX",
        "time_full": "H:mm:ss XXX VV",
    },
)

_JA_CALENDAR = CalendarNames(
    months_wide=(
        "1月", "2月", "3月", "4月", "5月", "6月",
        "7月", "8月", "9月", "10月", "11月", "12月",
    ),
    months_abbreviated=(
        "1月", "2月", "3月", "4月", "5月", "6月",
        "7月", "8月", "9月", "10月", "11月", "12月",
    ),
    days_wide=("日曜日", "月曜日", "火曜日", "水曜日", "木曜日", "金曜日", "土曜日"),
    days_abbreviated=("日", "月", "火", "水", "木", "金", "土"),
    am="午前",
    pm="午後",
    patterns={
        "date_short": "y/MM/dd",
        "date_medium": "y/MM/dd",
        "date_long": "y年M月d日",
        "date_full": "y年M月d日EEEE",
        "time_short": "H:mm",
        "time_medium": "H:mm:ss",
        "time_long": "H:mm:ss XXX",
        "time_full": "H時mm分ss秒 VV",
    },
)

# C keeps English names with ISO-like patterns.
_C_CALENDAR = CalendarNames(
    months_wide=_EN_CALENDAR.months_wide,
    months_abbreviated=_EN_CALENDAR.months_abbreviated,
    days_wide=_EN_CALENDAR.days_wide,
    days_abbreviated=_EN_CALENDAR.days_abbreviated,
    patterns={
        "date_short": "yyyy-MM-dd",
        "date_medium": "yyyy-MM-dd",
        "date_long": "yyyy-MM-dd",
        "date_full": "EEE yyyy-MM-dd",
        "time_short": "HH:mm",
        "time_medium": "HH:mm:ss",
        "time_long": "HH:mm:ssXXX",
        "time_full": "HH:mm:ss.SSSSSSXXX",
        "datetime": "{date}'T'{time}",
    },
)


# ==============================================================================
# Special Casing
# ==============================================================================

# Turkic dotted/dotless i. "I" followed by U+0307 COMBINING DOT ABOVE is the
# decomposed form of "İ" and lower-cases to plain "i".
_TURKIC_CASING = (
    SpecialCasingRule("I\u0307", "i", CasingOperation.LOWER),
    SpecialCasingRule("I", "ı", CasingOperation.LOWER),
    SpecialCasingRule("İ", "i", CasingOperation.LOWER),
    SpecialCasingRule("i", "İ", CasingOperation.UPPER),
    SpecialCasingRule("I\u0307", "i", CasingOperation.FOLD),
    SpecialCasingRule("I", "ı", CasingOperation.FOLD),
    SpecialCasingRule("İ", "i", CasingOperation.FOLD),
)


# ==============================================================================
# Locale Table Registry
# ==============================================================================


def _locale(
    locale_id: str,
    calendar: CalendarNames,
    collation: CollationTable | None = None,
    special_casing: tuple[SpecialCasingRule, ...] = (),
    decimal: str = ".",
    group: str | None = ",",
) -> LocaleData:
    return LocaleData(
        locale_id=locale_id,
        version=BUILTIN_VERSION,
        collation=collation or CollationTable(),
        special_casing=special_casing,
        calendar=calendar,
        decimal_separator_default=decimal,
        group_separator_default=group,
    )


def builtin_tables() -> dict[str, LocaleData]:
    """Build the bundled LocaleData entries keyed by canonical tag."""
    tables = [
        _locale(
            "C",
            _C_CALENDAR,
            collation=CollationTable(byte_order=True),
            group=None,
        ),
        _locale("en", _EN_CALENDAR),
        _locale("en-GB", _EN_GB_CALENDAR),
        _locale("de", _DE_CALENDAR, decimal=",", group="."),
        _locale("fr", _FR_CALENDAR, decimal=",", group=_NNBSP),
        _locale(
            "es",
            _ES_CALENDAR,
            collation=CollationTable(after={"n": ["ñ"]}),
            decimal=",",
            group=".",
        ),
        _locale(
            "sv",
            _SV_CALENDAR,
            collation=CollationTable(after={"z": ["å", "ä", "ö"]}),
            decimal=",",
            group=_NBSP,
        ),
        _locale(
            "da",
            _DA_CALENDAR,
            collation=CollationTable(after={"z": ["æ", "ø", "å"]}, case_first="upper"),
            decimal=",",
            group=".",
        ),
        _locale(
            "tr",
            _TR_CALENDAR,
            collation=CollationTable(
                before={"i": ["ı"]},
                after={"c": ["ç"], "g": ["ğ"], "o": ["ö"], "s": ["ş"], "u": ["ü"]},
            ),
            special_casing=_TURKIC_CASING,
            decimal=",",
            group=".",
        ),
        _locale(
            "az",
            _AZ_CALENDAR,
            collation=CollationTable(
                before={"i": ["ı"]},
                after={
                    "c": ["ç"],
                    "e": ["ə"],
                    "g": ["ğ"],
                    "h": ["x"],
                    "k": ["q"],
                    "o": ["ö"],
                    "s": ["ş"],
                    "u": ["ü"],
                },
            ),
            special_casing=_TURKIC_CASING,
            decimal=",",
            group=".",
        ),
        _locale(
            "cs",
            _CS_CALENDAR,
            collation=CollationTable(
                after={"c": ["č"], "h": ["ch"], "r": ["ř"], "s": ["š"], "z": ["ž"]},
            ),
            decimal=",",
            group=_NBSP,
        ),
        _locale("ja", _JA_CALENDAR),
    ]
    return {table.locale_id: table for table in tables}
