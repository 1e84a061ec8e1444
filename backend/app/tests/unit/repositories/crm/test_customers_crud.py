"""Test CRUDCustomer queries."""

from src.repositories.crm.crud.customers_crud import CRUDCustomer


class TestCRUDCustomer:
    """Test cases for CRUDCustomer."""

    def setup_method(self) -> None:
        self.repository = CRUDCustomer()

    def test_find_by_phone_fragment_matches_raw_stored_value(self, db, make_customer) -> None:
        make_customer(phone="0555 111 2233", email="x@example.com")
        compact = make_customer(phone="05551112233", email="y@example.com")
        make_customer(phone=None, email="z@example.com")

        matches = self.repository.find_by_phone_fragment(db, "5551112233")

        assert [c.id for c in matches] == [compact.id]

    def test_search_is_case_insensitive(self, db, make_customer) -> None:
        target = make_customer(first_name="Zeynep", email="zeynep@Pixel.com")
        make_customer(first_name="Can", email="can@example.com")

        assert [c.id for c in self.repository.list(db, search="PIXEL")] == [target.id]

    def test_search_folds_turkish_letters(self, db, make_customer) -> None:
        ayse = make_customer(company="Şahin Ltd", email="ayse@example.com")
        make_customer(first_name="Can", last_name="Demir", email="can@example.com")

        for term in ("AYŞE", "şahin", "ŞAHİN", "YILMAZ", "yilmaz"):
            assert [c.id for c in self.repository.list(db, search=term)] == [ayse.id], term

    def test_search_matches_dotted_capital_i(self, db, make_customer) -> None:
        target = make_customer(first_name="İrem", email="contact@example.com")

        assert [c.id for c in self.repository.list(db, search="irem")] == [target.id]

    def test_get_services_with_no_ids(self, db) -> None:
        assert self.repository.get_services(db, []) == []
