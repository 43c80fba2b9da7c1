LB_PER_KG = 2.20462
L_PER_GAL = 3.78541


def kg_to_lb(kg):
    return kg * LB_PER_KG


def l_to_gal(liters):
    return liters / L_PER_GAL
