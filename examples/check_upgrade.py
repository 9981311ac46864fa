from upgradekit import CheckSettings, check_compatibility, normalize, platform_profile
from upgradekit.exceptions import CompatibilityError

# Inspect this machine
profile = platform_profile()
print(f"OS: {profile.os.platform} {profile.os.version}")
print(f"CPU: {profile.processor_name}")
print(f"UEFI: {profile.facts.booted_uefi}  Secure Boot: {profile.facts.secure_boot}  TPM 2.0: {profile.facts.tpm_is_v2}")
print(f"RAM: {profile.facts.memory_mb:,} MB")

# How the processor string is read
identity = normalize(profile.processor_name or "")
print(f"\nNormalized: {identity if identity else 'unrecognized'}")

# Full check against the published supported processor lists
try:
    verdict = check_compatibility(profile.processor_name or "", profile.facts, settings=CheckSettings())
except CompatibilityError as e:
    print(f"\n✗ Check could not complete: {e}")
else:
    if verdict.final:
        print("\n✓ Ready for Windows 11")
    else:
        print(f"\n✗ Not ready: {', '.join(verdict.failed_checks())}")
