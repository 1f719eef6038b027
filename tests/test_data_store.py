from medinfo.data import SAMPLE_MEDICINES, MedicineDataStore
from medinfo.models import Availability, ScheduleClass


def test_exact_lookup_returns_dolo():
    record = MedicineDataStore().lookup_local("Dolo 650")
    assert record.name == "Dolo 650"
    assert record.schedule_class == ScheduleClass.OTC
    assert record.price_range.min == 25
    assert record.price_range.max == 35
    assert record.availability == Availability.WIDELY_AVAILABLE
    assert len(record.alternatives) == 4


def test_lookup_is_case_and_space_insensitive():
    store = MedicineDataStore()
    assert store.lookup_local("  PAN D ").name == "Pan D"
    assert store.lookup_local("azithromycin").name == "Azithromycin 500"


def test_lookup_by_composition():
    assert MedicineDataStore().lookup_local("paracetamol").name == "Dolo 650"
    assert MedicineDataStore().lookup_local("pantoprazole").name == "Pan D"


def test_lookup_when_key_is_inside_query():
    assert MedicineDataStore().lookup_local("tell me about dolo 650").name == "Dolo 650"


def test_unknown_and_blank_names():
    store = MedicineDataStore()
    assert store.lookup_local("xyznotamedicine") is None
    assert store.lookup_local("") is None
    assert store.lookup_local("   ") is None


def test_sample_records_have_valid_price_ranges():
    assert len(MedicineDataStore()) == len(SAMPLE_MEDICINES) == 3
    for _, record in MedicineDataStore():
        assert record.price_range.min <= record.price_range.max
        assert record.composition_text


def test_custom_records():
    store = MedicineDataStore({"Crocin": SAMPLE_MEDICINES["dolo 650"]})
    assert store.lookup_local("crocin").name == "Dolo 650"
