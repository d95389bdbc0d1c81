import os

# Environment variables win over a developer .env, so pin everything the
# tests depend on. Blank keys read as "not configured".
for _var in ("GROQ_API_KEY", "GEMINI_API_KEY", "OPENROUTER_API_KEY", "VALIDATOR_MODEL"):
    os.environ[_var] = ""
os.environ["LLM_PROVIDER"] = "groq"
os.environ["LLM_MODEL"] = "llama-3.3-70b"
os.environ["RENDER_JS"] = "false"
