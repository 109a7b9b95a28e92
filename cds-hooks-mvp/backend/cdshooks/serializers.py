"""
Response serializers: dataclass → JSON-able dict。

只负责「输出格式化」，不做任何解析或校验。
可选字段（source / links / suggestions / prefetch / description）为空时不输出。
"""


def serialize_service(service):
    data = {
        'hook': service.hook,
        'id': service.id,
        'title': service.title,
        'description': service.description,
    }
    if service.prefetch is not None:
        data['prefetch'] = dict(service.prefetch)
    return data


def serialize_discovery(services):
    """Serialize the catalog for GET /cds-services, keeping catalog order."""
    return {
        'services': [serialize_service(s) for s in services],
    }


def serialize_action(action):
    data = {'type': action.type.value}
    if action.description:
        data['description'] = action.description
    data['resource'] = action.resource
    return data


def serialize_card(card):
    data = {
        'summary': card.summary,
        'indicator': card.indicator.value,
    }
    if card.source is not None:
        source = {'label': card.source.label}
        if card.source.url:
            source['url'] = card.source.url
        data['source'] = source
    if card.links:
        data['links'] = [
            {'label': link.label, 'url': link.url, 'type': link.type}
            for link in card.links
        ]
    if card.suggestions:
        data['suggestions'] = [
            {
                'label': suggestion.label,
                'actions': [serialize_action(a) for a in suggestion.actions],
            }
            for suggestion in card.suggestions
        ]
    return data


def serialize_card_response(response):
    """Serialize a CardResponse for POST /cds-services/<id>."""
    return {
        'cards': [serialize_card(card) for card in response.cards],
    }
