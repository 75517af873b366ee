"""
/api/groq and /api/tavily: prompts out, cleaned text back, fixed texts when offline.
"""

import json

import httpx

from astrobiogen.fallbacks import PLANET_FACTS, RESEARCH
from tests.conftest import UNKEYED, groq_reply, tavily_reply

GENES = [
    {"gene_symbol": "MYH7", "gene_name": "Myosin Heavy Chain 7", "fold_change": -2.8, "p_value": 0.0001},
    {"gene_symbol": "MT1", "gene_name": "Metallothionein 1", "fold_change": 2.7, "p_value": 0.0002},
]
EXPERIMENT = {"title": "Mouse Muscular Response to Microgravity", "organism": "Mus musculus (Mouse)",
              "tissue": "Skeletal muscle", "mission": "SpaceX CRS-8", "duration": "33 days"}


class TestGroq:
    def test_explain_genes_live(self, client, upstreams):
        upstreams.on("api.groq.com", groq_reply("## Summary\n**Muscle** genes go down."))
        r = client.post("/api/groq/explain-genes", json={"genes": GENES, "experiment": EXPERIMENT})
        assert r.status_code == 200
        assert r.json() == {"explanation": "Summary\nMuscle genes go down."}
        sent = json.loads(upstreams.calls[0].content)
        assert sent["messages"][0]["role"] == "system"
        assert "MT1 (Metallothionein 1): 2.70 fold change" in sent["messages"][1]["content"]
        assert upstreams.calls[0].headers["Authorization"] == "Bearer test-groq-key"

    def test_explain_genes_without_key(self, make_client, upstreams):
        client = make_client(UNKEYED)
        r = client.post("/api/groq/explain-genes", json={"genes": GENES, "experiment": {"organism": "mice"}})
        assert r.status_code == 200
        assert r.json()["explanation"].startswith("Analysis of gene expression changes in mice under space conditions")
        assert r.headers["X-Degraded"] == "true"
        assert upstreams.calls == []

    def test_explain_genes_requires_genes(self, client):
        for body in ({}, {"genes": []}, {"genes": "MYH7"}):
            r = client.post("/api/groq/explain-genes", json=body)
            assert r.status_code == 400
            assert r.json() == {"error": "Valid gene data is required"}

    def test_space_effects(self, client):
        r = client.post("/api/groq/explain-space-effects",
                        json={"experiment": EXPERIMENT, "geneChanges": {"upregulated": 5, "downregulated": 5}})
        assert r.status_code == 200
        assert r.json()["explanation"].startswith("The space environment affects Mus musculus (Mouse)")

    def test_space_effects_accepts_empty_objects(self, client):
        r = client.post("/api/groq/explain-space-effects", json={"experiment": {}, "geneChanges": {}})
        assert r.status_code == 200
        assert r.json()["explanation"].startswith("The space environment affects organisms")

    def test_space_effects_requires_both(self, client):
        r = client.post("/api/groq/explain-space-effects", json={"experiment": EXPERIMENT})
        assert r.status_code == 400
        assert r.json() == {"error": "Experiment metadata and gene changes are required"}

    def test_planet_facts_live(self, client, upstreams):
        upstreams.on("api.groq.com", groq_reply("1. Mars is red.\n2. Mars has two moons.\n"))
        r = client.post("/api/groq/planet-facts", json={"planet": "Mars"})
        assert r.json() == {"facts": ["Mars is red.", "Mars has two moons."]}

    def test_planet_facts_offline(self, client):
        assert client.post("/api/groq/planet-facts", json={"planet": "saturn"}).json() == {
            "facts": PLANET_FACTS["Saturn"],
        }
        facts = client.post("/api/groq/planet-facts", json={"planet": "Vulcan"}).json()["facts"]
        assert facts[0] == "Vulcan is one of the celestial bodies in our solar system."
        assert len(facts) == 5

    def test_planet_facts_requires_planet(self, client):
        r = client.post("/api/groq/planet-facts", json={"planet": "  "})
        assert r.status_code == 400
        assert r.json() == {"error": "Planet name is required"}

    def test_quiz_live(self, client, upstreams):
        questions = [
            {"question": "Largest planet?", "options": ["Mars", "Jupiter", "Venus", "Earth"], "correctAnswer": "Jupiter"},
            {"question": "Bad one", "options": ["a", "b"], "correctAnswer": "a"},
        ]
        upstreams.on("api.groq.com", groq_reply("```json\n" + json.dumps(questions) + "\n```"))
        r = client.post("/api/groq/generate-quiz",
                        json={"planets": [{"name": "Jupiter"}], "facts": ["Jupiter is big"], "questionCount": 3})
        assert r.status_code == 200
        assert [q["question"] for q in r.json()["questions"]] == ["Largest planet?"]

    def test_quiz_unparseable_falls_back(self, client, upstreams):
        upstreams.on("api.groq.com", groq_reply("Sure! Here are some questions..."))
        r = client.post("/api/groq/generate-quiz", json={"planets": ["Mercury", "Mars"], "questionCount": 2})
        assert [q["correctAnswer"] for q in r.json()["questions"]] == ["Mercury", "Jupiter"]
        assert r.headers["X-Degraded"] == "true"

    def test_quiz_requires_planets(self, client):
        r = client.post("/api/groq/generate-quiz", json={"planets": []})
        assert r.status_code == 400
        assert r.json() == {"error": "Valid planets data is required"}

    def test_live_mode_maps_bad_status_to_502(self, client, upstreams):
        upstreams.on("api.groq.com", lambda request: httpx.Response(401, json={"error": "bad key"}))
        r = client.post("/api/groq/planet-facts", json={"planet": "Mars"}, params={"mode": "live"})
        assert r.status_code == 502


class TestTavily:
    def test_research_live(self, client, upstreams):
        upstreams.on("api.tavily.com", tavily_reply(
            "Bone loss research informs osteoporosis care.",
            results=[{"title": "NASA HRP", "url": "https://www.nasa.gov/hrp", "content": "Human research"}],
        ))
        r = client.post("/api/tavily/research", json={"query": "bone loss in space"})
        assert r.status_code == 200
        assert r.json() == {
            "answer": "Bone loss research informs osteoporosis care.",
            "sources": [{"title": "NASA HRP", "url": "https://www.nasa.gov/hrp", "content": "Human research"}],
        }
        sent = json.loads(upstreams.calls[0].content)
        assert sent["search_depth"] == "basic"
        assert sent["max_results"] == 5

    def test_research_offline(self, client):
        r = client.post("/api/tavily/research", json={"query": "bone loss in space"})
        assert r.status_code == 200
        assert r.json()["answer"] == RESEARCH["answer"]
        assert r.json()["answer"].startswith("The gene expression changes observed in this space experiment")
        assert len(r.json()["sources"]) == 2

    def test_answerless_response_falls_back(self, client, upstreams):
        upstreams.on("api.tavily.com", tavily_reply(None, results=[{"url": "https://x"}]))
        r = client.post("/api/tavily/research", json={"query": "anything"})
        assert r.json()["answer"] == RESEARCH["answer"]
        assert r.headers["X-Degraded"] == "true"

    def test_research_requires_query(self, client):
        r = client.post("/api/tavily/research", json={})
        assert r.status_code == 400
        assert r.json() == {"error": "Query is required"}

    def test_search_live_and_offline(self, client, upstreams):
        r = client.post("/api/tavily/search", json={"query": "rings of Saturn"})
        assert r.status_code == 200
        assert r.json()["results"][0]["image_url"] == (
            "https://science.nasa.gov/wp-content/uploads/2023/05/saturn-800x600-1.jpg"
        )
        upstreams.on("api.tavily.com", tavily_reply("Saturn has rings.", images=["https://img/1"]))
        r = client.post("/api/tavily/search", json={"query": "rings of Saturn", "include_raw_search_results": True})
        assert r.json()["answer"] == "Saturn has rings."
        assert r.json()["images"] == ["https://img/1"]
        assert json.loads(upstreams.calls[-1].content)["include_raw_content"] is True

    def test_earth_applications_keyword_fallbacks(self, client):
        muscle = client.post("/api/tavily/earth-applications",
                             json={"experimentType": "muscle atrophy", "genes": GENES}).json()
        assert "MYH7" in muscle["answer"]
        plant = client.post("/api/tavily/earth-applications",
                            json={"experimentType": "plant growth", "genes": ["ATHB-7"]}).json()
        assert plant["answer"].startswith("Research on plant genes affected by spaceflight")
        generic = client.post("/api/tavily/earth-applications",
                              json={"experimentType": "bacteria", "genes": ["rpoS"]}).json()
        assert generic["answer"].startswith("Space biology research on gene expression changes")

    def test_earth_applications_validation(self, client):
        r = client.post("/api/tavily/earth-applications", json={"experimentType": "muscle", "genes": []})
        assert r.status_code == 400
        assert r.json() == {"error": "Experiment type and valid gene data are required"}

    def test_medical_relevance(self, client, upstreams):
        r = client.post("/api/tavily/medical-relevance", json={"genes": ["TP53"]})
        assert r.status_code == 200
        assert r.json()["sources"][0]["url"] == "https://genelab.nasa.gov/"
        upstreams.on("api.tavily.com", tavily_reply("TP53 is a tumour suppressor."))
        r = client.post("/api/tavily/medical-relevance", json={"genes": ["TP53"], "condition": "cancer"})
        assert r.json()["answer"] == "TP53 is a tumour suppressor."
        query = json.loads(upstreams.calls[-1].content)["query"]
        assert "TP53" in query and "cancer" in query

    def test_medical_relevance_requires_genes(self, client):
        r = client.post("/api/tavily/medical-relevance", json={"condition": "cancer"})
        assert r.status_code == 400
