"""Static domain and keyword lists consumed by the domain trust evaluator.

Built once at import time and shared read-only.  Matching against these lists
is by substring containment on the lower-cased hostname, so ``bbc.co.uk``-style
subdomains are caught along with some incidental matches (the bare ``ac``
entry, for instance, matches any hostname containing those two letters).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TrustLists:
    misinformation_domains: tuple[str, ...]
    credible_domains: tuple[str, ...]
    government_edu_domains: tuple[str, ...]
    misinfo_keywords: tuple[str, ...]
    trusted_tlds: tuple[str, ...] = ("in", "org", "com")
    official_subdomain_markers: tuple[str, ...] = (".gov.", ".ac.", ".edu.")


_MISINFORMATION_DOMAINS = (
    # India
    "thenationalistview.com", "postcard.news", "opindia.com", "kreately.in",
    "rightlog.in", "sudarshannews.in", "organiser.org", "jantakareporter.com",
    "navbharattimes.indiatimes.com", "pgurus.com", "sirf-news.com",
    "mynation.net", "tfipost.com", "swarajyamag.com", "hindupost.in",
    "newsbharati.com", "deshgujarat.com", "indiatimes.in", "nationalviews.in",
    "republicworld.com", "janatakaadesh.com", "indiatvnews.in",
    # Global
    "infowars.com", "naturalnews.com", "theepochtimes.com", "breitbart.com",
    "beforeitsnews.com", "worldtruth.tv", "newsmax.com", "dailystormer.su",
    "zerohedge.com",
)

_CREDIBLE_DOMAINS = (
    "thehindu.com", "indianexpress.com", "ndtv.com", "theprint.in",
    "thewire.in", "news18.com", "hindustantimes.com", "livemint.com",
    "telegraphindia.com", "tribuneindia.com", "economictimes.indiatimes.com",
    "timesofindia.indiatimes.com", "thestatesman.com", "deccanherald.com",
    "theweek.in", "frontline.thehindu.com", "outlookindia.com", "scroll.in",
    "firstpost.com", "cnbctv18.com", "businesstoday.in",
)

_GOVERNMENT_EDU_DOMAINS = (
    "gov.in", "nic.in", "edu.in", "ac.in", "ac", "res.in", "india.gov.in",
    "mygov.in", "digitalindia.gov.in", "pib.gov.in", "meity.gov.in",
    "rbi.org.in", "uidai.gov.in", "niti.gov.in", "mea.gov.in",
    "iitb.ac.in", "iisc.ac.in", "iitm.ac.in", "iitd.ac.in", "jnu.ac.in",
    "du.ac.in", "ignou.ac.in", "aiims.edu", "iitkgp.ac.in",
)

# English and Hindi (Devanagari) phrases
_MISINFO_KEYWORDS = (
    "shocking", "exclusive", "conspiracy", "secret", "banned", "censored",
    "miracle", "cure", "ancient secret", "doctors hate", "they don't want you to know",
    "government hiding", "suppressed", "exposed", "revealed", "scandal",
    "विस्फोटक", "चौंकाने वाला", "रहस्य", "षड्यंत्र", "प्रतिबंधित",
    "चमत्कार", "इलाज", "प्राचीन रहस्य", "डॉक्टर नापसंद करते हैं",
)


DEFAULT_TRUST_LISTS = TrustLists(
    misinformation_domains=_MISINFORMATION_DOMAINS,
    credible_domains=_CREDIBLE_DOMAINS,
    government_edu_domains=_GOVERNMENT_EDU_DOMAINS,
    misinfo_keywords=_MISINFO_KEYWORDS,
)
