"""Tests for the spectral library, interpolation and spectrum synthesis."""

import json

import numpy as np
import pytest

from telescope_sim.core.types import CelestialObject, ObjectType
from telescope_sim.errors import SpectralLibraryError
from telescope_sim.spectra.library import SpectralLibrary, interpolate_spectrum
from telescope_sim.spectra.spectral_codes import SPECTRAL_CODES, spectral_code_for, spectral_type_for
from telescope_sim.spectra.synthesis import (
    GALAXY_CONTINUUM_K,
    SpectralSynthesizer,
    SpectrumSource,
    blackbody_spectrum,
    galaxy_spectrum,
    normalize_peak,
    stellar_spectrum,
    temperature_from_spectral_type,
)
from telescope_sim.core.radiometry import blackbody


WAVELENGTHS = np.arange(3900.0, 4501.0, 1.0)


@pytest.fixture
def library_dict():
    wave = [3800.0, 4000.0, 4200.0, 4400.0, 4600.0]
    return {
        "wavelength": wave,
        "spectra": [
            [1.0, 2.0, 3.0, 2.0, 1.0],
            [4.0, 3.0, 2.0, 1.0, 0.5],
            [0.5, 1.0, 1.5, 2.0, 2.5],
        ],
        "spec_types": ["G5 V", "B3 III", "M0 V"],
        "spec_codes": [50505000, 20303000, 70005000],
    }


@pytest.fixture
def library(library_dict):
    return SpectralLibrary.from_dict(library_dict)


class TestInterpolation:
    def test_exact_at_grid_points(self):
        src_w = np.array([4000.0, 4100.0, 4200.0])
        src_f = np.array([1.5, 2.5, 0.5])
        out = interpolate_spectrum(src_w, src_f, src_w)
        np.testing.assert_allclose(out, src_f)

    def test_linear_between_points(self):
        out = interpolate_spectrum([4000.0, 4100.0], [1.0, 3.0], [4025.0, 4050.0])
        np.testing.assert_allclose(out, [1.5, 2.0])

    def test_flat_extrapolation(self):
        out = interpolate_spectrum([4000.0, 4100.0], [1.0, 3.0], [3000.0, 5000.0])
        np.testing.assert_allclose(out, [1.0, 3.0])

    def test_decreasing_grid(self):
        out = interpolate_spectrum([4100.0, 4000.0], [3.0, 1.0], [4050.0])
        np.testing.assert_allclose(out, [2.0])


class TestSpectralLibrary:
    def test_exact_match_case_insensitive(self, library):
        entry = library.find("b3 iii")
        assert entry.spec_type == "B3 III"
        assert entry.code == 20303000

    def test_class_letter_fallback(self, library):
        entry = library.find("G2 III")
        assert entry.spec_type == "G5 V"

    def test_no_match(self, library):
        assert library.find("K3 V") is None
        assert library.find("") is None

    def test_find_by_code(self, library):
        assert library.find_by_code(70005000).spec_type == "M0 V"
        assert library.find_by_code(1) is None

    def test_read_only(self, library):
        with pytest.raises(ValueError):
            library.spectra[0, 0] = 99.0

    def test_shape_mismatch(self, library_dict):
        library_dict["spectra"][1] = [1.0, 2.0]
        with pytest.raises(SpectralLibraryError):
            SpectralLibrary.from_dict(library_dict)

    def test_missing_key(self, library_dict):
        del library_dict["spec_types"]
        with pytest.raises(SpectralLibraryError):
            SpectralLibrary.from_dict(library_dict)

    def test_from_json(self, tmp_path, library_dict):
        path = tmp_path / "atlas.json"
        path.write_text(json.dumps(library_dict), encoding="utf-8")
        lib = SpectralLibrary.from_json(path)
        assert len(lib) == 3
        assert lib.source == "atlas.json"

    def test_from_json_missing(self, tmp_path):
        with pytest.raises(SpectralLibraryError) as err:
            SpectralLibrary.from_json(tmp_path / "nope.json")
        assert err.value.resource == "nope.json"


class TestTemperature:
    @pytest.mark.parametrize("spec_type,temp", [
        ("O5 V", 35000.0), ("B0 III", 25000.0), ("A2 V", 8500.0), ("F5", 5700.0),
        ("G2 V", 5600.0), ("K0 III", 5000.0), ("M4 V", 2700.0), ("B", 25000.0),
    ])
    def test_table(self, spec_type, temp):
        assert temperature_from_spectral_type(spec_type) == temp

    @pytest.mark.parametrize("spec_type", ["", "X5 V", "WD"])
    def test_default(self, spec_type):
        assert temperature_from_spectral_type(spec_type) == 5800.0


class TestStellarSpectrum:
    def test_blackbody_peak_is_one(self):
        flux = blackbody_spectrum(6000.0, WAVELENGTHS)
        assert flux.max() == pytest.approx(1.0)

    def test_normalize_zero(self):
        np.testing.assert_array_equal(normalize_peak(np.zeros(3)), np.zeros(3))

    def test_library_spectrum(self, library):
        spec = stellar_spectrum("G5 V", WAVELENGTHS, library)
        assert spec.source is SpectrumSource.LIBRARY
        assert spec.matched_type == "G5 V"
        assert spec.flux.max() == pytest.approx(1.0)
        # G5 V peaks at 4200 Å in the fixture atlas
        assert WAVELENGTHS[np.argmax(spec.flux)] == 4200.0

    def test_fallback_without_library(self):
        spec = stellar_spectrum("G5 V", WAVELENGTHS, None)
        assert spec.source is SpectrumSource.BLACKBODY
        np.testing.assert_allclose(spec.flux, blackbody_spectrum(5000.0, WAVELENGTHS))

    def test_fallback_without_match(self, library):
        spec = stellar_spectrum("K3 V", WAVELENGTHS, library)
        assert spec.source is SpectrumSource.BLACKBODY


class TestGalaxySpectrum:
    def test_ca_k_redshifted(self):
        """z = 0.02 puts Ca II K at 3933.663 × 1.02 Å."""
        z = 0.02
        wl = np.arange(3900.0, 4500.0, 0.05)
        continuum = normalize_peak(blackbody(wl / (1 + z), GALAXY_CONTINUUM_K))
        ratio = galaxy_spectrum(z, wl) / continuum

        window = (wl > 3990.0) & (wl < 4030.0)
        observed = wl[window][np.argmin(ratio[window])]
        assert observed == pytest.approx(3933.663 * 1.02, abs=0.1)
        assert ratio[window].min() == pytest.approx(np.exp(-0.5), rel=1e-3)

        rest_index = np.argmin(np.abs(wl - 3933.663))
        assert ratio[rest_index] > 0.99

    def test_not_renormalized(self):
        flux = galaxy_spectrum(0.0, WAVELENGTHS)
        assert flux.max() <= 1.0
        assert flux.min() > 0.0


class TestSynthesizer:
    def test_lazy_load_failure_falls_back(self, tmp_path):
        synth = SpectralSynthesizer(library_path=tmp_path / "missing.json")
        star = CelestialObject("S", 0.0, 0.0, 10.0, spec_type="A0 V")
        spec = synth.synthesize(star, WAVELENGTHS)
        assert spec.source is SpectrumSource.BLACKBODY
        assert isinstance(synth.library_error, SpectralLibraryError)

        first_error = synth.library_error
        synth.synthesize(star, WAVELENGTHS)
        assert synth.library_error is first_error

    def test_library_used(self, library):
        synth = SpectralSynthesizer(library=library)
        star = CelestialObject("S", 0.0, 0.0, 10.0, spec_type="M0 V")
        assert synth.synthesize(star, WAVELENGTHS).matched_type == "M0 V"

    def test_galaxy(self):
        synth = SpectralSynthesizer()
        gal = CelestialObject("G", 0.0, 0.0, 14.0, redshift=0.01, obj_type=ObjectType.GALAXY)
        spec = synth.synthesize(gal, WAVELENGTHS)
        assert spec.source is SpectrumSource.GALAXY
        np.testing.assert_allclose(spec.flux, galaxy_spectrum(0.01, WAVELENGTHS))


class TestSpectralCodes:
    def test_known_code(self):
        assert spectral_code_for("G5 V") == 50505000
        assert spectral_code_for("  k3   iii ") == 60303000

    def test_round_trip_table(self):
        for label, code in list(SPECTRAL_CODES.items())[:25]:
            assert spectral_type_for(code) == label

    def test_unknown(self):
        assert spectral_code_for("Z9 V") is None
        assert spectral_type_for(123) is None
