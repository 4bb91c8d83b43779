from beam_calc.engine.pipeline import analyze, moment_profile
from beam_calc.sections.section_model import SectionModel
from beam_calc.services.report_pdf import export_report_pdf

section = SectionModel()

for support in ("simply_supported", "cantilever"):
    res = analyze(5.0, 10.0, support, section=section)
    print(f"[{support}]")
    print("  reacciones =", res.reactions.to_dict())
    print("  M_max [N·m] =", res.max_moment, "en x =", res.x_max_moment)
    print("  σ [Pa] =", res.stress)
    print("  flecha [m] =", res.deflection)
    print("  residual ΣFy =", res.residual_force)

    prof = moment_profile(res.spec, 11)
    for s in prof:
        print(f"    x={s.x:5.2f}  V={s.shear:8.3f}  M={s.moment:8.3f}")

    export_report_pdf(f"beam_report_{support}.pdf", res, prof, section=section)
