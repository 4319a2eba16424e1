"""Tests for organization/individual matching during donation imports."""

import pytest

from inkind_app.importer.pipeline import (
    DonorFields,
    DonorResolutionError,
    ResolutionContext,
    individual_key,
    make_organization_code,
    resolve_donor,
)
from inkind_app.importer.pipeline.donors import DEFAULT_ORG_CODE
from inkind_app.models import Individual, Organization, db


class TestMakeOrganizationCode:
    def test_slugifies_name(self):
        assert make_organization_code("Acme Food Bank", set()) == "ACME_FOOD_BANK"
        assert make_organization_code("  Café & Co. ", set()) == "CAF_CO"

    def test_appends_suffix_until_unused(self):
        assert make_organization_code("Acme Food Bank", {"ACME_FOOD_BANK"}) == "ACME_FOOD_BANK_1"
        assert make_organization_code("Acme Food Bank", {"ACME_FOOD_BANK", "ACME_FOOD_BANK_1"}) == "ACME_FOOD_BANK_2"

    def test_blank_or_symbol_only_names_fall_back_to_default(self):
        assert make_organization_code("", set()) == DEFAULT_ORG_CODE
        assert make_organization_code("!!!", set()) == "ORG"
        assert make_organization_code("!!!", {"ORG"}) == "ORG_1"

    def test_long_names_stay_within_fifty_characters(self):
        base = "A" * 46
        assert make_organization_code("A" * 60, set()) == base
        suffixed = make_organization_code("A" * 60, {base})
        assert suffixed == base + "_1"
        assert len(suffixed) <= 50


class TestIndividualKey:
    def test_joins_lowercased_parts(self):
        key = individual_key("Ada", "Lovelace", None, "Springfield", "IL", "62701")
        assert key == "ada|lovelace||springfield|il|62701"

    def test_all_blank_is_none(self):
        assert individual_key("", None, " ", None, "", None) is None

    def test_donor_fields_identity(self):
        assert DonorFields(email="a@b.co").identifies_individual is True
        assert DonorFields(address="1 Main St").identifies_individual is False


class TestResolutionContext:
    def test_load_snapshots_existing_donors(self, test_organization, test_individual):
        context = ResolutionContext.load()

        assert context.organizations_by_name["acme food bank"] == "ACME_FOOD_BANK"
        assert "ACME_FOOD_BANK" in context.organization_codes
        assert context.individuals_by_email["ada@example.com"] == test_individual.individual_id
        key = individual_key("Ada", "Lovelace", "12 Analytical Way", "Springfield", "IL", "62701")
        assert context.individuals_by_key[key] == test_individual.individual_id

    def test_blank_email_and_key_are_not_registered(self):
        context = ResolutionContext()
        context.register_individual(7, email=None, key=None)
        assert context.individuals_by_email == {}
        assert context.individuals_by_key == {}


class TestResolveDonor:
    def test_anonymous_creates_nothing(self):
        context = ResolutionContext.load()
        donor = DonorFields(organization_name="Acme Pantry", first_name="Ada", email="ada@example.com")

        assert resolve_donor(context, donor, anonymous=True) == (None, None)
        assert Organization.query.count() == 0
        assert Individual.query.count() == 0

    def test_row_without_donor_fields(self):
        assert resolve_donor(ResolutionContext.load(), DonorFields()) == (None, None)

    def test_existing_organization_matched_case_insensitively(self, test_organization):
        context = ResolutionContext.load()
        code, individual_id = resolve_donor(context, DonorFields(organization_name="ACME FOOD BANK"))

        assert code == "ACME_FOOD_BANK"
        assert individual_id is None
        assert Organization.query.count() == 1

    def test_new_organization_takes_contact_fields(self):
        context = ResolutionContext.load()
        donor = DonorFields(
            organization_name="Acme Pantry",
            first_name="Wile",
            last_name="Coyote",
            city="Springfield",
            state="IL",
            zip="62701",
            email="wile@acme.test",
        )

        code, _ = resolve_donor(context, donor)

        organization = db.session.get(Organization, code)
        assert code == "ACME_PANTRY"
        assert organization.organization_name == "Acme Pantry"
        assert organization.contact_first_name == "Wile"
        assert organization.contact_email == "wile@acme.test"
        assert context.organizations_by_name["acme pantry"] == "ACME_PANTRY"

    def test_organization_name_wins_over_individual_fields(self):
        code, individual_id = resolve_donor(
            ResolutionContext.load(),
            DonorFields(organization_name="Acme Pantry", first_name="Ada", last_name="Lovelace"),
        )
        assert code == "ACME_PANTRY"
        assert individual_id is None
        assert Individual.query.count() == 0

    def test_code_taken_after_load_is_retried_with_suffix(self, test_organization):
        # Context loaded before ACME_FOOD_BANK became visible.
        stale = ResolutionContext()

        code, _ = resolve_donor(stale, DonorFields(organization_name="Acme Food-Bank"))

        assert code == "ACME_FOOD_BANK_1"
        assert "ACME_FOOD_BANK" in stale.organization_codes
        assert db.session.get(Organization, "ACME_FOOD_BANK_1").organization_name == "Acme Food-Bank"

    def test_code_retries_are_bounded(self, test_organization):
        stale = ResolutionContext(max_code_attempts=1)

        with pytest.raises(DonorResolutionError, match="Could not create a unique organization code"):
            resolve_donor(stale, DonorFields(organization_name="Acme Food-Bank"))

    def test_individual_matched_by_email(self, test_individual):
        context = ResolutionContext.load()
        _, individual_id = resolve_donor(context, DonorFields(first_name="Someone", email="ada@example.com"))
        assert individual_id == test_individual.individual_id

    def test_individual_matched_by_name_and_address(self, test_individual):
        context = ResolutionContext.load()
        donor = DonorFields(
            first_name="ADA",
            last_name="lovelace",
            address="12 Analytical Way",
            city="Springfield",
            state="IL",
            zip="62701",
        )
        _, individual_id = resolve_donor(context, donor)
        assert individual_id == test_individual.individual_id
        assert Individual.query.count() == 1

    def test_new_individual_gets_placeholder_names_and_is_reused(self):
        context = ResolutionContext.load()
        donor = DonorFields(email="grace@example.com")

        _, first_id = resolve_donor(context, donor)
        _, second_id = resolve_donor(context, donor)

        individual = db.session.get(Individual, first_id)
        assert first_id == second_id
        assert individual.individual_first_name == "Unknown"
        assert individual.individual_last_name == "Unknown"
        assert Individual.query.count() == 1
