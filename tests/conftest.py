import asyncio
import json
import os
import tempfile

# Keep test runs from writing log files into the working tree
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "etimoloji-test-logs"))

import httpx
import pytest
from dotenv import load_dotenv

load_dotenv()


def chunk_lines(store, chunk_id=2) -> str:
    """Serialize an arena the way the structured dictionary streams it."""
    return "\n".join(
        [
            json.dumps({"type": "data", "nodes": [{"type": "data", "data": [{}]}]}),
            "this line is not json",
            json.dumps({"type": "chunk", "id": chunk_id, "data": store}, ensure_ascii=False),
        ]
    )


KELIME_STORE = [
    {"words": 1},
    [2],
    {"name": 3, "note": 4, "etymologies": 5, "relatedWords": 16},
    "kelime",
    "%bkelam%b sözcüğü ile eş kökenlidir.",
    [6],
    {
        "languages": 7,
        "originalText": 10,
        "romanizedText": 11,
        "definition": 12,
        "relation": 13,
        "paranthesis": None,
    },
    [8],
    {"name": 9, "abbreviation": 15},
    "Arapça",
    "كلمة",
    "kalima",
    "söz",
    {"text": 14},
    "sözcüğünden alıntıdır.",
    "Ar",
    [17],
    "kelam",
]

TDK_KELIME = [
    {
        "madde": "kelime",
        "lisan": "Arapça kelime",
        "anlamlarListe": [
            {
                "anlam": "Anlamlı ses veya ses birliği, söz, sözcük",
                "ozelliklerListe": [{"tam_adi": "isim"}],
                "orneklerListe": [{"ornek": "Her kelimesi bir inci tanesiydi."}],
            },
            {
                "anlam": "Söz",
                "orneklerListe": [
                    {"ornek": "Bir kelime ile anlattı."},
                    {"ornek": "Kelimeyi ağzından kaçırdı."},
                    {"ornek": "Dördüncü örnek gösterilmez."},
                ],
            },
        ],
    }
]

AKSOZLUK_PAGE = """
<html><body>
<h1>kelime</h1>
<article>
  <p><span style="color: #999">&nbsp;</span>10 Mayıs 2020</p>
  <p>Arapça <a href="/kalima">kalima</a> sözcüğünden gelir.</p>
</article>
</body></html>
"""

ETIMOLOJI_PAGE = """
<html><body><main>
<h1>kelime</h1>
<h3>Kelime Kökeni</h3>
<p>Arapça <a href="/kelime/kalima">kalima</a> kelimesinden alınmıştır.</p>
<h3>Tarihte En Eski Kaynak</h3>
<p>Kelime ilk kez 1303 yılında Codex Cumanicus'ta geçer.</p>
</main></body></html>
"""


def kelime_upstreams(request: httpx.Request) -> httpx.Response:
    """Fake internet: canned answers for 'kelime' from every source, 404 for everything else."""
    host = request.url.host
    path = request.url.path

    if host == "www.nisanyansozluk.com" and path == "/kelime/kelime/__data.json":
        return httpx.Response(200, text=chunk_lines(KELIME_STORE))
    if host == "sozluk.gov.tr":
        if request.url.params.get("ara") == "kelime":
            return httpx.Response(200, json=TDK_KELIME)
        return httpx.Response(200, json={"error": "Sonuç bulunamadı"})
    if host == "aksozluk.org" and path == "/kelime":
        return httpx.Response(200, text=AKSOZLUK_PAGE)
    if host == "www.etimolojiturkce.com" and path == "/kelime/kelime":
        return httpx.Response(200, text=ETIMOLOJI_PAGE)
    return httpx.Response(404, text="<html><body>Bulunamadı</body></html>")


def make_client_factory(handler):
    def factory():
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def client_factory_for():
    """Build an orchestrator client factory around a MockTransport handler."""
    return make_client_factory


@pytest.fixture
def kelime_handler():
    return kelime_upstreams


@pytest.fixture
def kelime_store():
    return json.loads(json.dumps(KELIME_STORE))


@pytest.fixture
def chunk_text():
    return chunk_lines


@pytest.fixture
def tdk_kelime():
    return json.loads(json.dumps(TDK_KELIME, ensure_ascii=False))


@pytest.fixture
def aksozluk_page():
    return AKSOZLUK_PAGE


@pytest.fixture
def etimoloji_page():
    return ETIMOLOJI_PAGE


@pytest.fixture
def run():
    """Run a coroutine to completion (the suite has no async plugin)."""
    return asyncio.run
