"""Tests for EligibilityFilter."""

from anvil.api.engine_config import EngineConfig
from anvil.engine.eligibility import EligibilityFilter, accumulate_runemarks


class TestEligibilityOptions:
    """Test suite for option sets."""

    def test_faction_options_mandatory_when_listed(self, catalog):
        """Test that fighters with factions must choose one."""
        eligibility = EligibilityFilter(catalog)
        factions, allows_none = eligibility.faction_options(catalog.get_fighter("Human"))
        assert factions == ["Order", "Chaos"]
        assert allows_none is False

    def test_faction_options_none_when_empty(self, catalog):
        """Test that fighters without factions may choose none."""
        eligibility = EligibilityFilter(catalog)
        factions, allows_none = eligibility.faction_options(catalog.get_fighter("Malignant"))
        assert factions == []
        assert allows_none is True

    def test_archetype_options_exclude_forbidden_fighter(self, catalog):
        """Test that archetypes forbidding the fighter are not offered."""
        eligibility = EligibilityFilter(catalog)
        options = eligibility.archetype_options(catalog.get_fighter("Ogre"), "Destruction")
        assert "Zealot" not in options
        assert "Commander" in options

    def test_archetype_options_exclude_forbidden_faction(self, catalog):
        """Test that archetypes forbidding the faction are not offered."""
        eligibility = EligibilityFilter(catalog)
        human = catalog.get_fighter("Human")
        assert "Mage" not in eligibility.archetype_options(human, "Chaos")
        assert "Mage" in eligibility.archetype_options(human, "Order")

    def test_archetype_options_never_forbidden_for_any_fighter(self, catalog):
        """Test that no offered archetype forbids the fighter or its faction."""
        eligibility = EligibilityFilter(catalog)
        for fighter in catalog.fighters:
            for faction in list(fighter.faction_runemarks) or [None]:
                for name in eligibility.archetype_options(fighter, faction):
                    assert not catalog.get_archetype(name).forbids(fighter.name, faction)

    def test_secondary_options_need_one_handed_primary(self, catalog):
        """Test that secondary equipment is only offered with a one-handed primary."""
        eligibility = EligibilityFilter(catalog)
        assert eligibility.secondary_options(catalog.get_primary_weapon("Great Weapon"), None) == []
        assert eligibility.secondary_options(None, None) == []
        assert eligibility.secondary_options(catalog.get_primary_weapon("Hand Weapon"), None) == [
            "Shield",
            "Dagger",
            "Throwing Axes",
        ]

    def test_secondary_options_empty_when_archetype_forbids(self, catalog):
        """Test that archetypes forbidding secondary equipment empty the options."""
        eligibility = EligibilityFilter(catalog)
        mage = catalog.get_archetype("Mage")
        assert eligibility.secondary_options(catalog.get_primary_weapon("Hand Weapon"), mage) == []

    def test_primary_options_one_handed_for_mage(self, catalog):
        """Test that a one-handed requirement filters primary weapons."""
        eligibility = EligibilityFilter(catalog)
        options = eligibility.primary_options(catalog.get_archetype("Mage"))
        assert "Great Weapon" not in options
        assert "Pistol" in options

    def test_mount_options_exclude_forbidden(self, catalog):
        """Test that mounts forbidding the fighter are not offered."""
        eligibility = EligibilityFilter(catalog)
        assert eligibility.mount_options(catalog.get_fighter("Ogre")) == []
        assert eligibility.mount_options(catalog.get_fighter("Human")) == ["Warhorse", "Spectral Steed"]

    def test_extra_runemark_options(self, catalog):
        """Test that owned runemarks and mounted restrictions are excluded."""
        eligibility = EligibilityFilter(catalog)
        assert eligibility.extra_runemark_options(["Leader"], mounted=False) == ["Fly", "Agile", "Scout"]
        assert eligibility.extra_runemark_options(["Leader"], mounted=True) == ["Agile", "Scout"]


class TestAccumulateRunemarks:
    """Test suite for runemark accumulation."""

    def test_base_archetype_and_mount_runemarks(self, catalog):
        """Test accumulation order and de-duplication."""
        runemarks = accumulate_runemarks(
            catalog.get_fighter("Human"), catalog.get_archetype("Zealot"), catalog.get_mount("Warhorse")
        )
        assert runemarks == ["Berserker", "Mounted"]

    def test_mounted_exemption(self, catalog):
        """Test that exempt fighters do not gain the Mounted runemark."""
        runemarks = accumulate_runemarks(
            catalog.get_fighter("Malignant"), None, catalog.get_mount("Spectral Steed")
        )
        assert runemarks == ["Fly", "Ethereal"]


class TestReconcile:
    """Test suite for selection reconciliation."""

    def test_forbidden_archetype_reverts_to_commander(self, catalog, make_selection):
        """Test that Ogre cannot stay a Zealot."""
        reconciliation = EligibilityFilter(catalog).reconcile(
            make_selection(fighter_type="Ogre", archetype="Zealot")
        )
        assert reconciliation.build.archetype.name == "Commander"
        assert reconciliation.selection.archetype == "Commander"
        assert reconciliation.messages == ["Ogre cannot be a Zealot. Reverting Archetype to Commander."]

    def test_forbidden_faction_archetype_reverts(self, catalog, make_selection):
        """Test that a faction restriction reverts the archetype."""
        reconciliation = EligibilityFilter(catalog).reconcile(
            make_selection(faction_runemark="Chaos", archetype="Mage")
        )
        assert reconciliation.build.archetype.name == "Commander"
        assert reconciliation.messages == ["Chaos cannot have a Mage Archetype. Reverting Archetype to Commander."]

    def test_missing_archetype_defaults_silently(self, catalog, make_selection):
        """Test that no archetype choice takes the default without a message."""
        reconciliation = EligibilityFilter(catalog).reconcile(make_selection())
        assert reconciliation.build.archetype.name == "Commander"
        assert reconciliation.messages == []

    def test_configured_default_archetype(self, catalog, make_selection):
        """Test that the default archetype comes from the engine config."""
        eligibility = EligibilityFilter(catalog, EngineConfig(default_archetype="Warrior"))
        reconciliation = eligibility.reconcile(make_selection(fighter_type="Ogre", archetype="Zealot"))
        assert reconciliation.build.archetype.name == "Warrior"

    def test_faction_defaults_to_first_allowed(self, catalog, make_selection):
        """Test that the faction is mandatory when the fighter lists factions."""
        reconciliation = EligibilityFilter(catalog).reconcile(make_selection())
        assert reconciliation.build.faction_runemark == "Order"
        assert reconciliation.options.faction_allows_none is False

    def test_illegal_faction_reverts_with_message(self, catalog, make_selection):
        """Test that a faction the fighter cannot take is replaced."""
        reconciliation = EligibilityFilter(catalog).reconcile(make_selection(faction_runemark="Death"))
        assert reconciliation.build.faction_runemark == "Order"
        assert len(reconciliation.messages) == 1

    def test_unknown_fighter_falls_back_to_first(self, catalog, make_selection):
        """Test that an unknown fighter is replaced by the first one."""
        reconciliation = EligibilityFilter(catalog).reconcile(make_selection(fighter_type="Dragon"))
        assert reconciliation.build.fighter.name == "Human"
        assert "Unknown fighter 'Dragon'" in reconciliation.messages[0]

    def test_two_handed_primary_clears_secondary(self, catalog, make_selection):
        """Test that a two-handed primary forces secondary to none and disables it."""
        reconciliation = EligibilityFilter(catalog).reconcile(
            make_selection(primary_weapon="Great Weapon", secondary_weapon="Shield")
        )
        assert reconciliation.build.secondary_weapon is None
        assert reconciliation.selection.secondary_weapon is None
        assert reconciliation.options.secondary_weapons == []
        assert reconciliation.options.secondary_enabled is False
        assert len(reconciliation.messages) == 1

    def test_one_handed_primary_enables_secondary(self, catalog, make_selection):
        """Test that re-selecting a one-handed primary enables secondary equipment again."""
        reconciliation = EligibilityFilter(catalog).reconcile(
            make_selection(primary_weapon="Hand Weapon", secondary_weapon="Shield")
        )
        assert reconciliation.build.secondary_weapon.name == "Shield"
        assert reconciliation.options.secondary_enabled is True
        assert reconciliation.messages == []

    def test_mage_reverts_two_handed_primary_and_secondary(self, catalog, make_selection):
        """Test Mage restrictions on primary and secondary equipment."""
        reconciliation = EligibilityFilter(catalog).reconcile(
            make_selection(archetype="Mage", primary_weapon="Great Weapon", secondary_weapon="Shield")
        )
        assert reconciliation.build.primary_weapon.name == "Hand Weapon"
        assert reconciliation.build.secondary_weapon is None
        assert len(reconciliation.messages) == 2

    def test_forbidden_mount_reverts(self, catalog, make_selection):
        """Test that a mount forbidding the fighter is removed."""
        reconciliation = EligibilityFilter(catalog).reconcile(
            make_selection(fighter_type="Ogre", mount="Warhorse")
        )
        assert reconciliation.build.mount is None
        assert reconciliation.messages == ["Ogre cannot take a Warhorse. Reverting Mount."]

    def test_owned_extra_runemark_reverts(self, catalog, make_selection):
        """Test that an extra runemark already granted is removed."""
        reconciliation = EligibilityFilter(catalog).reconcile(make_selection(runemark="Leader"))
        assert reconciliation.build.extra_runemark is None
        assert "already has the Leader runemark" in reconciliation.messages[0]
        assert "Leader" not in reconciliation.options.extra_runemarks

    def test_mounted_fighter_cannot_take_fly(self, catalog, make_selection):
        """Test the mounted restriction on extra runemarks."""
        reconciliation = EligibilityFilter(catalog).reconcile(
            make_selection(mount="Warhorse", runemark="Fly")
        )
        assert reconciliation.build.extra_runemark is None
        assert "cannot be taken by a mounted fighter" in reconciliation.messages[0]

    def test_unknown_blessing_reverts(self, catalog, make_selection):
        """Test that an unknown blessing is dropped."""
        reconciliation = EligibilityFilter(catalog).reconcile(make_selection(blessing="Luck"))
        assert reconciliation.build.blessing is None
        assert len(reconciliation.messages) == 1
