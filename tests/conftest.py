import pytest

PAGE_URL = "https://www.ebay.com/sch/i.html?_nkw=Gucci+Tshirt"


def make_item(item_id, title, condition="New", price="99.0", currency="USD", gallery=True):
    price_entry = {"__value__": price}
    if currency:
        price_entry["@currencyId"] = currency
    item = {
        "itemId": [item_id],
        "title": [title],
        "viewItemURL": [f"https://www.ebay.com/itm/{item_id}"],
        "condition": [{"conditionDisplayName": [condition]}],
        "sellingStatus": [{"currentPrice": [price_entry]}],
    }
    if gallery:
        item["galleryURL"] = [f"https://thumbs.ebaystatic.com/{item_id}.jpg"]
    return item


def make_payload(ack="Success", items=None, count=None, error_message=None):
    items = items or []
    body = {
        "ack": [ack],
        "itemSearchURL": [PAGE_URL],
        "searchResult": [{"@count": str(len(items) if count is None else count), "item": items}],
    }
    if error_message is not None:
        body["errorMessage"] = [{"error": [{"message": [error_message]}]}]
    return {"findItemsByKeywordsResponse": [body]}


@pytest.fixture
def two_item_payload():
    return make_payload(items=[
        make_item("111", "Gucci Tshirt Black", price="250.0"),
        make_item("222", "Gucci Logo Tshirt", condition="Pre-owned", price="120.5"),
    ])


@pytest.fixture
def zero_payload():
    return make_payload(count=0)


@pytest.fixture
def failure_payload():
    return make_payload(ack="Failure", error_message="Invalid keyword")
