from upgradekit import normalize

# Processor strings as reported by hardware inventory
names = [
    "Intel(R) Core(TM) i7-10700K CPU @ 3.80GHz",
    "11th Gen Intel(R) Core(TM) i5-1135G7 @ 2.40GHz",
    "AMD Ryzen 5 3600 6-Core Processor",
    "AMD Ryzen Threadripper PRO 3995WX 64-Core Processor",
    "Intel(R) N100",
    "Genuine Processor",
]

for name in names:
    identity = normalize(name)
    if identity:
        print(f"{name:<55} -> {identity.manufacturer} | {identity.brand} | {identity.model}")
    else:
        print(f"{name:<55} -> (unrecognized)")
