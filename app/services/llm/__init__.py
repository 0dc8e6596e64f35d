from app.services.llm.gemini_client import analyze_image, enrich_description, synthesize_speech

__all__ = ["enrich_description", "analyze_image", "synthesize_speech"]
