import pytest
from multiformats import CID

RAW_CID = "bafkreibme22gw2h7y2h7tg2fhqotaqjucnbc24deqo72b6mkl2egezxhvy"
DAG_PB_CID = "bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi"
V0_CID = "QmbWqxBEKC3P8tqsKc98xmWNzrzDtRLMiMPL8wBuTGsMnR"


@pytest.fixture
def cid() -> CID:
	return CID.decode(RAW_CID)


def nest(value, levels: int):
	for _ in range(levels):
		value = [value]
	return value
