"""Who is meeting whom, and how answers should be shaped for them."""

import json
from dataclasses import asdict, dataclass
from enum import Enum


class CustomerPersona(str, Enum):
    BALANCED = "Balanced"
    TECHNICAL = "Technical"
    FINANCIAL = "Financial"
    BUSINESS_EXECUTIVES = "Business Executives"


DEFAULT_ANSWER_STYLES = (
    "Executive Summary",
    "Data-Driven Insights",
    "Concise Answer",
    "Sales Points",
    "Anticipated Customer Questions",
)


@dataclass(frozen=True)
class MeetingContext:
    """Meeting setup that parameterises every prompt.

    ``answer_styles`` become the required ``### <style>`` sections of a
    search answer, in order.
    """

    seller_company: str = ""
    seller_names: str = ""
    client_company: str = ""
    client_names: str = ""
    target_products: str = ""
    product_domain: str = ""
    meeting_focus: str = ""
    persona: CustomerPersona = CustomerPersona.BALANCED
    answer_styles: tuple[str, ...] = DEFAULT_ANSWER_STYLES
    executive_snapshot: str = ""
    strategic_keywords: tuple[str, ...] = ()

    @property
    def prospect(self) -> str:
        return self.client_company or "the prospect"

    def style_directives(self) -> str:
        return "\n".join(
            f'- Create a section exactly titled "### {style}"' for style in self.answer_styles
        )

    def base_directive(self) -> str:
        """Persona and style instructions shared by every system prompt."""
        persona = self.persona.value
        parts = [f"Act as a Cognitive AI Sales Intelligence Agent for {persona} buyers."]
        if self.answer_styles:
            parts.append(
                "Your responses should strictly follow these styles as headers: "
                f"{', '.join(self.answer_styles)}."
            )
        if self.meeting_focus:
            parts.append(f"The primary meeting focus is {self.meeting_focus}.")
        parts.append(
            "Always ground your logic in source documents and maintain a "
            f"{persona.lower()} tone. Use high-density articulation."
        )
        return " ".join(parts)

    def prompt_fields(self) -> dict[str, str]:
        """Placeholder values for the bundled prompt templates."""
        return {
            "seller_company": self.seller_company,
            "seller_names": self.seller_names,
            "client_company": self.client_company,
            "client_names": self.client_names,
            "target_products": self.target_products,
            "product_domain": self.product_domain,
            "meeting_focus": self.meeting_focus,
            "persona": self.persona.value,
            "executive_snapshot": self.executive_snapshot,
            "strategic_keywords": ", ".join(self.strategic_keywords),
            "prospect": self.prospect,
            "style_directives": self.style_directives(),
        }

    def fingerprint(self) -> str:
        data = asdict(self)
        data["persona"] = self.persona.value
        return json.dumps(data, sort_keys=True)
