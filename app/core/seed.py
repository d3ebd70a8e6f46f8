"""Mock reference data the in-memory store is seeded with.

The catalog covers a few realistic review scenarios:

- 1008/1009: two Vitamin C products with no group (plain NEW approval)
- 2001/2002: an existing Amoxicillin Capsules group
- 2005: a duplicate Amoxicillin Capsules group created by mistake
- 2099: a group whose name only partially overlaps
- 3001/3002: pending application for more Amoxicillin Capsules
- 1001-1003, 4001/4002: ungrouped Amoxicillin Capsules (orphans)
"""
from datetime import date, datetime

from app.models import (
    Application,
    ApplicationType,
    DrugGroup,
    Product,
    RxType,
)

_PRODUCT_ROWS = [
    ("1001", "Amoxicillin Capsules", "Xiuzheng", "0.25g*24", RxType.RX, "H22022567", "Xiuzheng Pharmaceutical Group"),
    ("1002", "Amoxicillin Capsules", "CSPC", "0.25g*20", RxType.RX, "H13021750", "CSPC Pharmaceutical Group"),
    ("1003", "Amoxicillin Capsules", "Baiyunshan", "0.25g*30", RxType.RX, "H44021234", "Guangzhou Baiyunshan Pharmaceutical"),
    ("1008", "Vitamin C Tablets", "By-health", "100mg*100", RxType.OTC, "G20110089", "By-health Co., Ltd."),
    ("1009", "Vitamin C Tablets", "Yangshengtang", "100mg*100", RxType.OTC, "G20080666", "Yangshengtang Pharmaceutical"),
    ("1010", "Vitamin C Chewable Tablets", "Conba", "120 tablets", RxType.OTC, "G20141234", "Zhejiang Conba Pharmaceutical"),
    ("2001", "Amoxicillin Capsules", "United Labs", "0.25g*24", RxType.RX, "H20010111", "Zhuhai United Laboratories"),
    ("2002", "Amoxicillin Capsules", "NCPC", "0.25g*50", RxType.RX, "H20020222", "North China Pharmaceutical"),
    ("2005", "Amoxicillin Capsules", "Baiyunshan", "0.25g*10", RxType.RX, "H20050999", "Guangzhou Baiyunshan Pharmaceutical"),
    ("2099", "Amoxicillin", "Generic Pharma", "0.25g*20 dispersible", RxType.RX, "H20999999", "Generic Pharma Co., Ltd."),
    ("3001", "Amoxicillin Capsules", "Sunflower", "0.25g*12", RxType.RX, "H20030333", "Sunflower Pharmaceutical"),
    ("3002", "Amoxicillin Capsules", "Renhe", "0.25g*36", RxType.RX, "H20040444", "Renhe Pharmaceutical"),
    ("4001", "Amoxicillin Capsules", "Luoxin", "0.25g*48", RxType.RX, "H20050555", "Shandong Luoxin Pharmaceutical"),
    ("4002", "Amoxicillin Capsules", "Lukang", "0.25g*10", RxType.RX, "H20060666", "Shandong Lukang Pharmaceutical"),
]

# Legacy groups whose members predate the catalog; they render as unknown products
_GROUP_ROWS = [
    ("251", "999 Liuwei Dihuang Pills", ["251", "3654826"], date(2023, 1, 1)),
    ("451", "Jiuzhitang Qiju Dihuang Pills", ["451", "1262563"], date(2023, 2, 15)),
    ("672", "Minji Quanlu Pills", ["672", "910291"], date(2023, 3, 10)),
    ("674", "Baiyunshan Guilu Bushen Pills", ["674", "1605383"], date(2023, 4, 5)),
    ("1032", "Senkeyuan Compound Berberine Tablets", ["1032", "3875884"], date(2023, 5, 20)),
    ("1414", "999 Pediatric Paracetamol Granules", ["1414", "449286", "3443006"], date(2023, 6, 12)),
    ("2001", "Amoxicillin Capsules", ["2001", "2002"], date(2023, 7, 1)),
    ("2005", "Amoxicillin Capsules", ["2005"], date(2023, 8, 1)),
    ("2099", "Amoxicillin", ["2099"], date(2023, 8, 5)),
]


def initial_products() -> dict[str, Product]:
    return {
        row[0]: Product(
            id=row[0],
            name=row[1],
            brand=row[2],
            spec=row[3],
            rx_type=row[4],
            approval_no=row[5],
            manufacturer=row[6],
        )
        for row in _PRODUCT_ROWS
    }


def initial_groups() -> list[DrugGroup]:
    return [
        DrugGroup(id=gid, name=name, product_ids=list(members), created_at=created)
        for gid, name, members, created in _GROUP_ROWS
    ]


def initial_applications() -> list[Application]:
    return [
        Application(
            id="sub-1",
            type=ApplicationType.LINK,
            subject="Vitamin C same-variety link",
            applicant="Zhang San",
            submitted_at=datetime(2024, 2, 3, 16, 0),
            product_ids=["1008", "1009"],
            reason="Both Vitamin C tablets share ingredients and spec under different brands.",
        ),
        Application(
            id="sub-2",
            type=ApplicationType.LINK,
            subject="Amoxicillin capsules supplement",
            applicant="Li Si",
            submitted_at=datetime(2024, 2, 5, 9, 30),
            product_ids=["3001", "3002"],
            reason="Add the Sunflower and Renhe amoxicillin capsules to the same variety.",
        ),
    ]
