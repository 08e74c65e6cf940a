import math

# Below this gap between ka and kel the Bateman prefactor blows up; use the limit instead.
RATE_COLLISION_TOL = 1e-9


def bateman(tau, effective_dose_mg, ka, kel, V):
    """
    Plasma concentration (mg/L) of a single oral dose, tau hours after intake.

    One compartment, first-order absorption (ka) and elimination (kel):
      C(tau) = D*ka / (V*(ka - kel)) * (exp(-kel*tau) - exp(-ka*tau))

    When ka == kel the expression is 0/0; its limit D*ka*tau*exp(-ka*tau)/V
    is used instead. Negative tau (dose not taken yet) gives 0.
    """
    if tau < 0:
        return 0.0

    if abs(ka - kel) < RATE_COLLISION_TOL:
        C = effective_dose_mg * ka * tau * math.exp(-ka * tau) / V
        return max(C, 0.0)

    pre_factor = (effective_dose_mg * ka) / (V * (ka - kel))
    C = pre_factor * (math.exp(-kel * tau) - math.exp(-ka * tau))
    # NaN passes through; only rounding noise below zero is clamped
    return max(C, 0.0)


def one_compartment_first_order(t, y, ka, kel):
    """
    ODE form of the same model, used as a numerical reference.
    Two states:
      y[0] = drug in absorption depot (mg)
      y[1] = drug in central compartment (mg)
    """
    A_gut, A_c = y

    dA_gut_dt = -ka * A_gut
    dA_c_dt   = ka * A_gut - kel * A_c

    return [dA_gut_dt, dA_c_dt]
