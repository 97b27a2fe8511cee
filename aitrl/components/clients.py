"""
Chat model factory for the generative text service.
"""

import logging
from typing import Optional

from dotenv import dotenv_values
from langchain_ollama import ChatOllama
from langchain_openai import ChatOpenAI

import aitrl
from aitrl.prj_exception import ConfigurationError

LOGGERNAME = f"{aitrl.BASE_LOGGERNAME}.clients"


def get_llm(config: dict, env_file: Optional[str] = ".env"):
    """
    Build the chat model named in the config.

    Config keys:
        PROVIDER: "ollama" (default) or "openai"
        MODEL: model name, e.g. "llama3.1" or "gpt-4o-mini"
        BASE_URL: Ollama server URL
        TEMPERATURE: sampling temperature (low values keep the JSON predictable)

    The OpenAI key is read from OPENAI_API_KEY in `env_file`.
    """
    logger = logging.getLogger(LOGGERNAME)
    provider = str(config.get("PROVIDER", "ollama")).lower()
    model = config.get("MODEL")
    temperature = config.get("TEMPERATURE", 0.2)

    if provider == "ollama":
        base_url = config.get("BASE_URL", "http://localhost:11434")
        logger.info(f"Using Ollama model {model} at {base_url}")
        return ChatOllama(model=model or "llama3.1", base_url=base_url, temperature=temperature)

    if provider == "openai":
        env = dotenv_values(env_file) if env_file else {}
        api_key = env.get("OPENAI_API_KEY")
        if not api_key:
            raise ConfigurationError(f"OPENAI_API_KEY is not set in {env_file}")
        logger.info(f"Using OpenAI model {model}")
        return ChatOpenAI(api_key=api_key, model=model or "gpt-4o-mini", temperature=temperature)

    raise ConfigurationError(f"Unknown PROVIDER: {provider}")
