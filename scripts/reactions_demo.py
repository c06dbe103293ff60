from span_beam.domain.load_set import LoadSet
from span_beam.domain.supports import Support, Supports, SupportKind
from span_beam.engine.reactions import compute_reactions


L = 6.0

loads = LoadSet()
loads, _ = loads.add("point", position=2.0, magnitude=10_000)                    # N, + abajo
loads, _ = loads.add("distributed", position=0.0, magnitude=2_000, length=L)    # N/m, + abajo
loads, _ = loads.add("moment", position=4.0, magnitude=5_000)                   # N·m, + horario

for case in (("pin", "roller"), ("fixed", "roller"), ("pin", "fixed"), ("fixed", "fixed")):
    supports = Supports(
        start=Support(position=0.0, kind=SupportKind.coerce(case[0])),
        end=Support(position=L, kind=SupportKind.coerce(case[1])),
    )
    r = compute_reactions(loads, supports).rounded()
    print(f"{supports.case:>12}: Ra={r.reaction_a} N  Rb={r.reaction_b} N  Ma={r.moment_a} N·m  Mb={r.moment_b} N·m")
