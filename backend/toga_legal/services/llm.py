from __future__ import annotations

import requests

from toga_legal.core.ai_provider import ModelProvider
from toga_legal.core.config import AISettings
from toga_legal.core.errors import GenerationFailure

BULLETIN_SYSTEM = (
    "Actúa como un Relator de la Corte Suprema experto en indexación. "
    "Devuelve únicamente JSON válido, sin markdown ni texto extra."
)

BULLETIN_PROMPT = """Analiza el siguiente documento (Boletín Jurisprudencial) y extrae CADA UNA de las fichas jurisprudenciales encontradas.

FORMATO ESPERADO (JSON Array):
[
  {{
    "radicado": "Número del radicado (ej: 52059)",
    "sentencia_id": "Código de sentencia (ej: SP2163-2018)",
    "ddp_number": "Número DDP si existe (ej: 110)",
    "tema": "Tema principal (ej: Inasistencia alimentaria)",
    "tesis": "Texto completo de la tesis jurídica (los puntos i, ii, iii...)",
    "source_url": "Enlace/Link si aparece en el texto asociado a este item"
  }}
]

REGLAS:
- Extrae TODAS las entradas.
- Sé preciso con los números de radicado.
- Si encuentras un link de OneDrive/Sharepoint junto a la ficha, inclúyelo en 'source_url'.
- Retorna SOLO el JSON válido.

DOCUMENTO:
{text}
"""

SENTENCE_PROMPT = """Analiza esta sentencia completa y devuelve un JSON Array con UNA sola ficha:
[
  {{
    "radicado": "Número del radicado",
    "sentencia_id": "Código de la sentencia",
    "tema": "Tema principal",
    "tesis": "Tesis o regla de decisión",
    "source_url": null
  }}
]
Si no encuentras el radicado, devuelve [].

SENTENCIA:
{text}
"""


class LLMService:

    @staticmethod
    def generate_jurisprudence_records(text: str, source_type: str, settings: AISettings) -> str:
        """Pide a la IA las fichas del documento; devuelve el texto crudo de la respuesta."""
        template = BULLETIN_PROMPT if source_type == "bulletin" else SENTENCE_PROMPT
        prompt = template.format(text=text)
        try:
            return ModelProvider.generate(settings, prompt, system=BULLETIN_SYSTEM)
        except GenerationFailure:
            raise
        except (requests.RequestException, KeyError, IndexError, ValueError) as exc:
            raise GenerationFailure(
                str(exc),
                provider=settings.provider,
                model=settings.model,
                masked_key=settings.masked_key(),
            ) from exc
