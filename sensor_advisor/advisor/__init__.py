"""
sensor_advisor.advisor - Optional external text-generation advisor.

The external advisor is never required for correctness: every path degrades
to ``engine.recommender.recommend()``.

Modules:
  client     - TextGenerationClient (httpx.AsyncClient, HF Inference API shape).
  prompt     - describe_conditions(), build_prompt(), parse_response().
  capability - AdvisorState + AdvisorCapability lifecycle gate.
  service    - AdvisorService (fallback wrapper) + RecommendationFeed.
"""
