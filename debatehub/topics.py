# debatehub/topics.py
# Fixed debate topic taxonomy served by /api/topics. Topic ids double as room names.
from typing import Dict, List, Optional

TOPIC_CATALOG: Dict[str, List[Dict[str, str]]] = {
    "technology": [
        {"id": "tech1", "name": "Should AI development be regulated by governments?"},
        {"id": "tech2", "name": "Is social media doing more harm than good?"},
        {"id": "tech3", "name": "Should cryptocurrencies replace national currencies?"},
    ],
    "environment": [
        {"id": "env1", "name": "Is nuclear power the answer to climate change?"},
        {"id": "env2", "name": "Should single-use plastics be banned worldwide?"},
        {"id": "env3", "name": "Are carbon taxes an effective climate policy?"},
    ],
    "politics": [
        {"id": "pol1", "name": "Should voting be mandatory?"},
        {"id": "pol2", "name": "Should the voting age be lowered to 16?"},
    ],
    "society": [
        {"id": "soc1", "name": "Should university education be free?"},
        {"id": "soc2", "name": "Is a four-day work week better for society?"},
    ],
    "science": [
        {"id": "sci1", "name": "Should human gene editing be permitted?"},
        {"id": "sci2", "name": "Is space exploration worth the cost?"},
    ],
}


def find_topic(topic_id: str) -> Optional[Dict[str, str]]:
    for category, topics in TOPIC_CATALOG.items():
        for topic in topics:
            if topic["id"] == topic_id:
                return {**topic, "category": category}
    return None
